## Tela inicial: roteiro de atendimentos filtrado por dia/bairro
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.services import agenda_service
from app.api.services.roster_cache import RosterCache
from app.api.services.user_service import UserService
from app.core.security import get_current_user
from app.db.session import get_db
from app.schemas.agenda import HomeFeedOut

router = APIRouter(prefix="/agenda", tags=["Agenda"])


@router.get("", response_model=HomeFeedOut)
def get_agenda(
    dia: Optional[str] = None,
    bairro: Optional[str] = None,
    hora: Optional[int] = Query(None, ge=0, le=23),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = UserService.get_user(db, current_user["id"])
    cache = RosterCache(db, user.id).refresh()

    return agenda_service.home_feed(
        cache,
        day=dia,
        neighborhood=bairro,
        hour=datetime.now().hour if hora is None else hora,
        profile=UserService.get_profile(user),
    )
