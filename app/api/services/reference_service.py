# app/api/services/reference_service.py
import logging
from typing import List, Type, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.models.neighborhood import Neighborhood
from app.api.models.specialty import Specialty
from app.core.exceptions import StorageError, ValidationFailed

logger = logging.getLogger(__name__)

ReferenceModel = Union[Type[Specialty], Type[Neighborhood]]

# campo do formulário, rótulo e mensagem de nome vazio
_LABELS = {
    Specialty: ("specialty", "especialidade", "Informe o nome da especialidade"),
    Neighborhood: ("neighborhood", "bairro", "Informe o nome do bairro"),
}


class ReferenceService:
    """Especialidades e bairros: tabelas globais, sem filtro por usuário."""

    @staticmethod
    def list_all(db: Session, model: ReferenceModel) -> List:
        try:
            return list(db.execute(select(model).order_by(model.name)).scalars().all())
        except SQLAlchemyError as e:
            logger.exception("Erro ao listar %s", model.__tablename__)
            raise StorageError(f"Erro ao carregar {_LABELS[model][1]}s: {e}")

    @staticmethod
    def find_by_name(db: Session, model: ReferenceModel, name: str):
        return db.execute(
            select(model).where(model.name == name)
        ).scalar_one_or_none()

    @staticmethod
    def get_or_create(db: Session, model: ReferenceModel, name: str):
        """
        Devolve a linha com esse nome, criando se ainda não existir.

        Duas chamadas com o mesmo nome sempre resolvem para o mesmo id; se outra
        requisição inserir no meio do caminho, a violação de unicidade cai na busca.
        """
        field, label, empty_message = _LABELS[model]
        name = (name or "").strip()

        if not name:
            raise ValidationFailed({field: empty_message})

        existing = ReferenceService.find_by_name(db, model, name)
        if existing:
            return existing

        try:
            row = model(name=name)
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info("%s criado: id=%s name=%s", model.__tablename__, row.id, name)
            return row

        except IntegrityError:
            # nome duplicado (corrida com outra requisição): usa o existente
            db.rollback()
            existing = ReferenceService.find_by_name(db, model, name)
            if not existing:
                raise StorageError(f"Erro ao buscar {label} existente")
            return existing

        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Erro ao adicionar %s", label)
            raise StorageError(f"Erro ao adicionar {label}: {e}")
