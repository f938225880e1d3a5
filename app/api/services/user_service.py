## logica de negocios para usuários (perfil e avatar)
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.models.user import User
from app.api.services.avatar_storage import AvatarStorage
from app.core.exceptions import NotAuthenticated, StorageError
from app.schemas.user import ProfileOut

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotAuthenticated()
        return user

    @staticmethod
    def get_profile(user: User) -> ProfileOut:
        # nome do cadastro, senão a parte local do e-mail
        name = user.nome or (user.email or "").split("@")[0] or None

        return ProfileOut(
            id=user.id,
            name=name or "Usuário",
            avatar=name[0].upper() if name else "?",
            avatar_url=user.avatar_url or None,
        )

    @staticmethod
    def update_avatar(
        db: Session,
        user_id: int,
        filename: str,
        content: bytes,
        content_type: str = None,
        storage: AvatarStorage = None,
    ) -> ProfileOut:
        storage = storage or AvatarStorage()
        user = UserService.get_user(db, user_id)

        path = storage.upload(user_id, filename, content, content_type)

        try:
            user.avatar_url = storage.public_url(path)
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Erro ao salvar avatar do usuário %s", user_id)
            raise StorageError(f"Erro ao atualizar perfil: {e}")

        return UserService.get_profile(user)
