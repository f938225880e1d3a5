from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.models.user import User
from app.core.security import criar_token, get_password_hash, verify_password
from app.schemas.user import UserOut


class AuthService:

    @staticmethod
    def create_user(db: Session, email: str, password: str, nome: str = None):
        # bcrypt: limite de 72 BYTES
        password_bytes = password.encode("utf-8")

        if len(password_bytes) > 72:
            raise HTTPException(status_code=400, detail="Senha muito longa (máx. 72 bytes)")
        if not password:
            raise HTTPException(status_code=400, detail="Senha é obrigatória")

        existing = db.query(User).filter(User.email == email).first()
        if existing:
            raise HTTPException(status_code=400, detail="Email já cadastrado")

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            nome=(nome or "").strip() or None,
        )

        try:
            db.add(user)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=400, detail="Email já cadastrado")

        db.refresh(user)
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str):
        user = db.query(User).filter(User.email == email).first()

        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    @staticmethod
    def login(db: Session, email: str, password: str):
        user = AuthService.authenticate(db, email, password)

        if not user:
            raise HTTPException(status_code=401, detail="Email ou senha incorretos")

        # Cria o token JWT
        token = criar_token({"sub": str(user.id)})

        return {
            "access_token": token,
            "token_type": "bearer",
            "user": UserOut.model_validate(user),
        }
