## Perfil do usuário logado
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.api.services.avatar_storage import AvatarStorage, get_avatar_storage
from app.api.services.user_service import UserService
from app.core.security import get_current_user
from app.db.session import get_db
from app.schemas.user import ProfileOut

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me/profile", response_model=ProfileOut)
def get_profile(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    user = UserService.get_user(db, current_user["id"])
    return UserService.get_profile(user)


@router.post("/me/avatar", response_model=ProfileOut)
def upload_avatar(
    file: UploadFile = File(...),
    storage: AvatarStorage = Depends(get_avatar_storage),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Envia a foto de perfil e grava a URL pública na conta.
    """
    content = file.file.read()
    return UserService.update_avatar(
        db,
        current_user["id"],
        filename=file.filename or "avatar.png",
        content=content,
        content_type=file.content_type,
        storage=storage,
    )
