# app/api/services/roster_cache.py
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.models.doctor import Doctor
from app.api.models.neighborhood import Neighborhood
from app.api.models.schedule import Schedule
from app.api.models.specialty import Specialty
from app.api.services.reference_service import ReferenceService
from app.core.constants import SEM_BAIRRO, SEM_ESPECIALIDADE
from app.core.exceptions import StorageError
from app.schemas.doctor import DoctorOut
from app.schemas.reference import ReferenceOut
from app.schemas.schedule import ScheduleOut

logger = logging.getLogger(__name__)


# =========================
# Mapeamento linha -> DTO (única fronteira com o banco)
# =========================
def doctor_from_row(row: Doctor, specialty_names: Dict[int, str]) -> DoctorOut:
    return DoctorOut(
        id=row.id,
        name=row.name,
        crm=row.crm or "",
        phone=row.phone or "",
        specialty_id=row.specialty_id,
        specialty_name=specialty_names.get(row.specialty_id, SEM_ESPECIALIDADE),
        avatar_url=row.avatar_url or "",
        user_id=row.user_id,
    )


def schedule_from_row(row: Schedule, neighborhood_names: Dict[int, str]) -> ScheduleOut:
    return ScheduleOut(
        id=row.id,
        doctor_id=row.doctor_id,
        place_name=row.place_name or "",
        neighborhood_id=row.neighborhood_id,
        neighborhood_name=neighborhood_names.get(row.neighborhood_id, SEM_BAIRRO),
        day_of_week=row.day_of_week or "",
        start_time=row.start_time or "",
        end_time=row.end_time or "",
    )


class RosterCache:
    """
    Cópia em memória dos médicos/horários do usuário e das tabelas de referência.

    Nunca é corrigida parcialmente: depois de qualquer escrita chama-se refresh(),
    que refaz as quatro consultas e troca todas as listas de uma vez.
    """

    def __init__(self, db: Session, user_id: Optional[int]):
        self.db = db
        self.user_id = user_id
        self.loaded = False
        self.clear()

    def clear(self) -> None:
        self.doctors: List[DoctorOut] = []
        self.schedules: List[ScheduleOut] = []
        self.specialties: List[ReferenceOut] = []
        self.neighborhoods: List[ReferenceOut] = []

    def refresh(self) -> "RosterCache":
        specialties = [ReferenceOut.model_validate(s) for s in ReferenceService.list_all(self.db, Specialty)]
        neighborhoods = [ReferenceOut.model_validate(n) for n in ReferenceService.list_all(self.db, Neighborhood)]

        if self.user_id is None:
            self.clear()
            self.specialties, self.neighborhoods = specialties, neighborhoods
            self.loaded = True
            return self

        try:
            doctor_rows = self.db.execute(
                select(Doctor)
                .where(Doctor.user_id == self.user_id)
                .order_by(Doctor.name)
            ).scalars().all()

            doctor_ids = [d.id for d in doctor_rows]
            schedule_rows = []
            if doctor_ids:
                schedule_rows = self.db.execute(
                    select(Schedule)
                    .where(Schedule.doctor_id.in_(doctor_ids))
                    .order_by(Schedule.id)
                ).scalars().all()

            specialty_names = {s.id: s.name for s in specialties}
            neighborhood_names = {n.id: n.name for n in neighborhoods}

            doctors = [doctor_from_row(d, specialty_names) for d in doctor_rows]
            schedules = [schedule_from_row(s, neighborhood_names) for s in schedule_rows]

        except (SQLAlchemyError, ValidationError) as e:
            logger.exception("Erro ao carregar médicos do usuário %s", self.user_id)
            raise StorageError(f"Erro ao carregar médicos: {e}")

        self.doctors = doctors
        self.schedules = schedules
        self.specialties = specialties
        self.neighborhoods = neighborhoods
        self.loaded = True

        logger.debug(
            "cache recarregado: user_id=%s doctors=%s schedules=%s",
            self.user_id, len(doctors), len(schedules),
        )
        return self

    def get_doctor(self, doctor_id: int) -> Optional[DoctorOut]:
        return next((d for d in self.doctors if d.id == doctor_id), None)

    def schedules_for(self, doctor_id: int) -> List[ScheduleOut]:
        return [s for s in self.schedules if s.doctor_id == doctor_id]
