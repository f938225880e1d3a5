# app/api/services/avatar_storage.py
import logging
import time
from pathlib import Path
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import StorageError, ValidationFailed

logger = logging.getLogger(__name__)

# tipo de conteúdo -> extensão gravada na chave
EXTENSOES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def get_s3_client():
    """Cliente S3 (AWS, R2 ou MinIO, conforme AVATAR_S3_ENDPOINT_URL)."""
    return boto3.client(
        "s3",
        endpoint_url=settings.AVATAR_S3_ENDPOINT_URL or None,
        aws_access_key_id=settings.AVATAR_S3_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AVATAR_S3_SECRET_ACCESS_KEY or None,
        config=Config(signature_version="s3v4"),
        region_name=settings.AVATAR_S3_REGION,
    )


def _extension(filename: Optional[str], content_type: Optional[str]) -> str:
    # a extensão nunca vem crua do nome enviado pelo cliente
    if content_type:
        ext = EXTENSOES.get(content_type)
    else:
        suffix = Path(filename or "").suffix.lower().lstrip(".")
        ext = "jpg" if suffix == "jpeg" else suffix
        if ext not in EXTENSOES.values():
            ext = None

    if not ext:
        raise ValidationFailed({"avatar": "Formato de imagem não suportado"})
    return ext


class AvatarStorage:
    """
    Bucket de avatares.

    Chave no bucket: avatars/{user_id}-{timestamp}.{ext}; reenviar a mesma chave sobrescreve.
    """

    def __init__(self, client=None, bucket: Optional[str] = None, public_base_url: Optional[str] = None):
        self.client = client or get_s3_client()
        self.bucket = bucket or settings.AVATAR_BUCKET
        self.public_base_url = (public_base_url or settings.AVATAR_PUBLIC_BASE_URL or "").rstrip("/")

    def upload(self, user_id: int, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        ext = _extension(filename, content_type)
        if not content:
            raise ValidationFailed({"avatar": "Arquivo vazio"})
        if len(content) > settings.AVATAR_MAX_BYTES:
            raise ValidationFailed({"avatar": "Imagem muito grande"})

        key = f"avatars/{user_id}-{int(time.time() * 1000)}.{ext}"

        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or f"image/{'jpeg' if ext == 'jpg' else ext}",
                CacheControl="public, max-age=31536000",
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("Falha ao enviar avatar: bucket=%s key=%s", self.bucket, key)
            raise StorageError(f"Erro ao enviar imagem: {e}")

        logger.info("avatar enviado: user_id=%s key=%s bytes=%s", user_id, key, len(content))
        return key

    def public_url(self, key: str) -> str:
        # bucket público (CDN/domínio próprio) ou URL assinada de leitura
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"

        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key, "ResponseContentDisposition": "inline"},
                ExpiresIn=settings.AVATAR_URL_EXPIRES_SECONDS,
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("Falha ao gerar URL do avatar: key=%s", key)
            raise StorageError(f"Erro ao gerar link da imagem: {e}")


def get_avatar_storage() -> AvatarStorage:
    return AvatarStorage()
