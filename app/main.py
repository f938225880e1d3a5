## ponto de entrada do FastAPI (app instantiation, middlewares, inclusão de rotas)

# app/main.py
import logging
import re

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import RosterError

# Importe seus roteadores (endpoints)
from app.api.endpoints import agenda, auth, doctors, references, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("startup")

app = FastAPI(
    title="Plantão Médico",
    description="Backend para gerenciamento da lista de médicos e seus locais de atendimento.",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Toda falha de validação/banco vira uma mensagem para o usuário, nunca um 500 com stack trace
@app.exception_handler(RosterError)
async def roster_error_handler(request: Request, exc: RosterError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "errors": exc.errors},
    )


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(references.router)
app.include_router(doctors.router)
app.include_router(agenda.router)


@app.get("/")
def read_root():
    return {"app_name": app.title, "environment": settings.ENV}


@app.on_event("startup")
def startup_log():
    safe = re.sub(r":([^:@/]+)@", ":***@", settings.DATABASE_URL)
    logger.info("STARTUP DATABASE_URL = %s", safe)

# Para rodar com uvicorn:
# uvicorn app.main:app --reload
