from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel

from app.schemas.doctor import DoctorDetailOut, DoctorOut
from app.schemas.schedule import SlotView
from app.schemas.user import ProfileOut


class AgendaCard(BaseModel):
    doctor: DoctorOut
    slot: SlotView


class HomeFeedOut(BaseModel):
    greeting: str
    profile: Optional[ProfileOut] = None
    dias: List[str]
    bairros: List[str]
    total: int
    cards: List[AgendaCard]


class DoctorListOut(BaseModel):
    especialidades: List[str]
    bairros: List[str]
    total: int
    doctors: List[DoctorDetailOut]
