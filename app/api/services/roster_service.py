# app/api/services/roster_service.py
import logging
from typing import Dict, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.models.doctor import Doctor
from app.api.models.schedule import Schedule
from app.api.models.specialty import Specialty
from app.api.services.schedule_grouping import expand, slot_errors, slots_for_form
from app.core.exceptions import NotAuthenticated, NotFound, NotOwnedError, StorageError, ValidationFailed
from app.core.formatters import format_phone, initials
from app.schemas.doctor import DoctorFormOut, DoctorIn

logger = logging.getLogger(__name__)


def _raw_message(exc: SQLAlchemyError) -> str:
    # mensagem do driver, sem o SQL que o SQLAlchemy anexa
    return str(getattr(exc, "orig", None) or exc)


class RosterService:

    @staticmethod
    def validate_doctor(data: DoctorIn) -> None:
        errors: Dict[str, str] = {}

        if not data.name.strip():
            errors["name"] = "Nome é obrigatório"
        if not data.specialty_id:
            errors["specialty"] = "Especialidade é obrigatória"
        errors.update(slot_errors(data.slots))

        if errors:
            raise ValidationFailed(errors)

    @staticmethod
    def _doctor_values(data: DoctorIn) -> dict:
        name = data.name.strip()
        return {
            "name": name,
            "crm": data.crm.strip(),
            "phone": format_phone(data.phone),
            "specialty_id": data.specialty_id,
            "avatar_url": (data.avatar_url or "").strip() or initials(name),
        }

    @staticmethod
    def save_doctor(
        db: Session,
        user_id: Optional[int],
        data: DoctorIn,
        doctor_id: Optional[int] = None,
    ) -> int:
        """
        Cria (doctor_id ausente) ou atualiza o médico e substitui todos os horários dele.

        Passos, nesta ordem e na mesma transação:
          1. insert/update do médico (update restrito ao dono)
          2. delete de todas as linhas de schedules do médico
          3. insert das linhas geradas pelo expand dos slots
        Qualquer falha desfaz tudo; nada é repetido automaticamente.
        """
        RosterService.validate_doctor(data)

        if user_id is None:
            raise NotAuthenticated()

        values = RosterService._doctor_values(data)
        step = "Erro ao cadastrar médico" if doctor_id is None else "Erro ao atualizar médico"

        try:
            if db.get(Specialty, data.specialty_id) is None:
                raise ValidationFailed({"specialty": "Selecione uma especialidade válida"})

            # 1. médico
            if doctor_id is None:
                doctor = Doctor(user_id=user_id, **values)
                db.add(doctor)
                db.flush()
                doctor_id = doctor.id
            else:
                result = db.execute(
                    update(Doctor)
                    .where(Doctor.id == doctor_id, Doctor.user_id == user_id)
                    .values(**values)
                )
                if result.rowcount == 0:
                    db.rollback()
                    logger.warning("update sem linhas: doctor_id=%s user_id=%s", doctor_id, user_id)
                    raise NotOwnedError("Médico não encontrado ou sem permissão para editar")

                # 2. substituição completa, não diff
                step = "Erro ao atualizar agendamentos (delete)"
                db.execute(delete(Schedule).where(Schedule.doctor_id == doctor_id))

            # 3. novos horários
            step = "Erro ao atualizar agendamentos (insert)"
            rows = expand(doctor_id, data.slots, user_id=user_id)
            if rows:
                db.add_all([Schedule(**row) for row in rows])
                db.flush()

            db.commit()

        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("%s: doctor_id=%s user_id=%s", step, doctor_id, user_id)
            raise StorageError(f"{step}: {_raw_message(e)}")

        logger.info("médico salvo: doctor_id=%s user_id=%s schedules=%s", doctor_id, user_id, len(rows))
        return doctor_id

    @staticmethod
    def delete_doctor(db: Session, user_id: Optional[int], doctor_id: int) -> None:
        if user_id is None:
            raise NotAuthenticated()

        try:
            doctor = db.execute(
                select(Doctor).where(Doctor.id == doctor_id, Doctor.user_id == user_id)
            ).scalar_one_or_none()

            if not doctor:
                raise NotOwnedError("Médico não encontrado ou sem permissão para excluir")

            # schedules vão junto (cascade)
            db.delete(doctor)
            db.commit()

        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Erro ao excluir médico: doctor_id=%s", doctor_id)
            raise StorageError(f"Erro ao excluir médico: {_raw_message(e)}")

        logger.info("médico excluído: doctor_id=%s user_id=%s", doctor_id, user_id)

    @staticmethod
    def load_for_edit(db: Session, user_id: Optional[int], doctor_id: int) -> DoctorFormOut:
        if user_id is None:
            raise NotAuthenticated()

        try:
            doctor = db.execute(
                select(Doctor).where(Doctor.id == doctor_id, Doctor.user_id == user_id)
            ).scalar_one_or_none()

            if not doctor:
                raise NotFound("Médico não encontrado.")

            rows = db.execute(
                select(Schedule).where(Schedule.doctor_id == doctor_id).order_by(Schedule.id)
            ).scalars().all()

        except SQLAlchemyError as e:
            logger.exception("Erro ao carregar médico para edição: doctor_id=%s", doctor_id)
            raise StorageError(f"Erro ao carregar médico: {_raw_message(e)}")

        return DoctorFormOut(
            id=doctor.id,
            name=doctor.name,
            crm=doctor.crm or "",
            phone=doctor.phone or "",
            specialty_id=doctor.specialty_id,
            avatar_url=doctor.avatar_url,
            slots=slots_for_form(rows),
        )
