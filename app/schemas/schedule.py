from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field


# =========================
# Linha persistida (uma por dia)
# =========================
class ScheduleOut(BaseModel):
    id: int
    doctor_id: int
    place_name: str = ""
    neighborhood_id: Optional[int] = None
    neighborhood_name: Optional[str] = None
    day_of_week: str = ""
    start_time: str = ""
    end_time: str = ""

    class Config:
        from_attributes = True


# =========================
# Slot de atendimento (forma do formulário)
# =========================
class ServiceSlot(BaseModel):
    # id local do formulário, não existe no banco
    id: Optional[str] = None
    place_name: str = ""
    neighborhood_id: Optional[int] = None
    neighborhood_name: Optional[str] = None
    days_of_week: List[str] = Field(default_factory=list)
    start_time: str = ""
    end_time: str = ""


# Slot pronto para exibição ("Seg, Qua" / "08:00 - 12:00")
class SlotView(ServiceSlot):
    dias: str = ""
    horario: str = ""
