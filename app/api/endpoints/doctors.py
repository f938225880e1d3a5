## Rotas de médicos (lista, detalhe, cadastro/edição, exclusão)
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.services import agenda_service
from app.api.services.roster_cache import RosterCache
from app.api.services.roster_service import RosterService
from app.core.exceptions import NotFound
from app.core.security import get_current_user
from app.db.session import get_db
from app.schemas.agenda import DoctorListOut
from app.schemas.doctor import DoctorDetailOut, DoctorFormOut, DoctorIn

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def _detail(db: Session, user_id: int, doctor_id: int) -> DoctorDetailOut:
    # sempre relê do banco depois de escrever
    cache = RosterCache(db, user_id).refresh()
    detail = agenda_service.doctor_detail(cache, doctor_id)
    if detail is None:
        raise NotFound("Médico não encontrado.")
    return detail


@router.get("", response_model=DoctorListOut)
def list_doctors(
    search: Optional[str] = None,
    especialidade: Optional[str] = None,
    bairro: Optional[str] = None,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cache = RosterCache(db, current_user["id"]).refresh()
    return agenda_service.doctor_list(cache, search=search, specialty=especialidade, neighborhood=bairro)


@router.post("", response_model=DoctorDetailOut, status_code=201)
def create_doctor(
    payload: DoctorIn,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    doctor_id = RosterService.save_doctor(db, current_user["id"], payload)
    return _detail(db, current_user["id"], doctor_id)


@router.get("/{doctor_id}", response_model=DoctorDetailOut)
def get_doctor(
    doctor_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _detail(db, current_user["id"], doctor_id)


@router.get("/{doctor_id}/form", response_model=DoctorFormOut)
def get_doctor_form(
    doctor_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Dados para hidratar o formulário de edição (slots já agrupados).
    """
    return RosterService.load_for_edit(db, current_user["id"], doctor_id)


@router.put("/{doctor_id}", response_model=DoctorDetailOut)
def update_doctor(
    doctor_id: int,
    payload: DoctorIn,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RosterService.save_doctor(db, current_user["id"], payload, doctor_id=doctor_id)
    return _detail(db, current_user["id"], doctor_id)


@router.delete("/{doctor_id}")
def delete_doctor(
    doctor_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RosterService.delete_doctor(db, current_user["id"], doctor_id)
    return {"status": "deleted", "doctor_id": doctor_id}
