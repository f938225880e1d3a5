from pydantic import BaseModel, EmailStr
from typing import Optional

# =========================
# Cadastro de conta
# =========================
class UserCreate(BaseModel):
    email: EmailStr
    password: str
    nome: Optional[str] = None


# =========================
# Login
# =========================
class UserLogin(BaseModel):
    email: EmailStr
    password: str


# =========================
# Retorno de usuário
# =========================
class UserOut(BaseModel):
    id: int
    email: EmailStr
    nome: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


# =========================
# Resposta de login
# =========================
class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


# Dados de exibição do cabeçalho (nome + inicial ou foto)
class ProfileOut(BaseModel):
    id: int
    name: str
    avatar: str
    avatar_url: Optional[str] = None
