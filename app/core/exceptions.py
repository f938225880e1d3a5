## Erros da aplicação (convertidos em resposta JSON no app.main)
from typing import Dict, Optional


class RosterError(Exception):
    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class ValidationFailed(RosterError):
    """Campo obrigatório ausente; levantado antes de qualquer acesso ao banco."""
    status_code = 422

    def __init__(self, errors: Dict[str, str]):
        # a primeira mensagem vira o resumo exibido no topo
        super().__init__(next(iter(errors.values()), "Dados inválidos"), errors)


class NotAuthenticated(RosterError):
    status_code = 401

    def __init__(self, message: str = "Usuário não autenticado"):
        super().__init__(message)


class NotFound(RosterError):
    status_code = 404


class StorageError(RosterError):
    """Falha reportada pelo banco em select/insert/update/delete."""
    status_code = 400


class NotOwnedError(StorageError):
    # update/delete que não afetou nenhuma linha do usuário atual
    status_code = 403
