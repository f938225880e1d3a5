## Especialidades e bairros (tabelas globais, "buscar ou criar")
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.models.neighborhood import Neighborhood
from app.api.models.specialty import Specialty
from app.api.services.reference_service import ReferenceService
from app.core.security import get_current_user
from app.db.session import get_db
from app.schemas.reference import ReferenceIn, ReferenceOut

router = APIRouter(tags=["References"])


@router.get("/specialties", response_model=List[ReferenceOut])
def list_specialties(db: Session = Depends(get_db)):
    return ReferenceService.list_all(db, Specialty)


@router.post("/specialties", response_model=ReferenceOut)
def add_specialty(
    payload: ReferenceIn,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReferenceService.get_or_create(db, Specialty, payload.name)


@router.get("/neighborhoods", response_model=List[ReferenceOut])
def list_neighborhoods(db: Session = Depends(get_db)):
    return ReferenceService.list_all(db, Neighborhood)


@router.post("/neighborhoods", response_model=ReferenceOut)
def add_neighborhood(
    payload: ReferenceIn,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReferenceService.get_or_create(db, Neighborhood, payload.name)
