## Rotas de autenticação (/register, /login, /me, /logout)
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.services.auth_service import AuthService
from app.api.services.user_service import UserService
from app.core.security import get_current_user
from app.db.session import get_db
from app.schemas.user import LoginResponse, UserCreate, UserLogin, UserOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    return AuthService.create_user(db, payload.email, payload.password, payload.nome)


@router.post("/login", response_model=LoginResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    return AuthService.login(db, payload.email, payload.password)


@router.get("/me", response_model=UserOut)
def me(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService.get_user(db, current_user["id"])


@router.post("/logout")
def logout(current_user: dict = Depends(get_current_user)):
    # token é stateless: basta o cliente descartá-lo
    return {"status": "ok"}
