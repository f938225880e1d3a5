import re
from typing import Optional


def format_phone(phone: Optional[str]) -> str:
    """
    Aplica a máscara brasileira de exibição.

    "11987654321" -> "(11) 98765-4321"
    "1133334444"  -> "(11) 3333-4444"

    Qualquer outra quantidade de dígitos é devolvida como digitada (sem espaços nas pontas).
    """
    if not phone:
        return ""

    digits = re.sub(r"\D", "", phone)

    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"

    return phone.strip()


def initials(name: Optional[str]) -> str:
    # primeira letra das duas primeiras palavras: "Ana Maria Souza" -> "AM"
    parts = (name or "").split()
    return "".join(p[0] for p in parts[:2]).upper()
