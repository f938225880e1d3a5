## config do ambiente (variaveis de ambiente)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# Definimos as configurações base da aplicação
class Settings(BaseSettings):
    # O model_config especifica onde Pydantic deve buscar as variáveis (do .env)
    model_config = SettingsConfigDict(
        env_file='.env',
        case_sensitive=True, # Garante que as chaves sejam lidas exatamente como estão no .env
        extra='ignore' # Ignora chaves que existam no ambiente, mas não na classe
    )

    # ----------------------------------------------------
    # 1. CONFIGURAÇÕES GERAIS DO PROJETO E DO SERVIDOR
    # ----------------------------------------------------
    ENV: str
    SECRET_KEY: str
    BASE_URL: str = "http://localhost:8000"
    FRONTEND_BASE_URL: str = "http://localhost:3000"
    # lista separada por vírgula
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"
    LOG_LEVEL: str = "INFO"

    # ----------------------------------------------------
    # 2. CONFIGURAÇÕES DO BANCO DE DADOS
    # ----------------------------------------------------
    DATABASE_URL: str

    # ----------------------------------------------------
    # 3. AUTENTICAÇÃO (JWT)
    # ----------------------------------------------------
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ----------------------------------------------------
    # 4. ARMAZENAMENTO DE AVATARES
    # ----------------------------------------------------
    AVATAR_BUCKET: str = "plantao-avatars"
    # vazio = AWS; preencher para R2/MinIO
    AVATAR_S3_ENDPOINT_URL: str = ""
    AVATAR_S3_ACCESS_KEY_ID: str = ""
    AVATAR_S3_SECRET_ACCESS_KEY: str = ""
    AVATAR_S3_REGION: str = "us-east-1"
    # domínio público do bucket; vazio = URL assinada
    AVATAR_PUBLIC_BASE_URL: str = ""
    AVATAR_URL_EXPIRES_SECONDS: int = 7 * 24 * 3600
    AVATAR_MAX_BYTES: int = 2 * 1024 * 1024

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Cria uma instância única da classe Settings para ser importada em toda a aplicação
settings = Settings()
