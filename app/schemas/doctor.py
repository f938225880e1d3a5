from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.schedule import ServiceSlot, SlotView


# =========================
# Cadastro / edição (campos do médico + slots)
# =========================
# Obrigatoriedade de nome/especialidade é checada no RosterService,
# para devolver erros por campo antes de tocar no banco.
class DoctorIn(BaseModel):
    name: str = ""
    crm: str = ""
    phone: str = ""
    specialty_id: Optional[int] = None
    avatar_url: Optional[str] = None

    slots: List[ServiceSlot] = Field(default_factory=list)


# =========================
# Retorno
# =========================
class DoctorOut(BaseModel):
    id: int
    name: str
    crm: str = ""
    phone: str = ""
    specialty_id: Optional[int] = None
    specialty_name: Optional[str] = None
    avatar_url: Optional[str] = None
    user_id: int

    class Config:
        from_attributes = True


class DoctorDetailOut(DoctorOut):
    slots: List[SlotView] = Field(default_factory=list)


# Hidratação do formulário de edição: sempre ao menos um slot
class DoctorFormOut(BaseModel):
    id: int
    name: str
    crm: str = ""
    phone: str = ""
    specialty_id: Optional[int] = None
    avatar_url: Optional[str] = None
    slots: List[ServiceSlot]
