# tests/conftest.py
import os

# configuração precisa existir antes de importar qualquer módulo do app
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.create_table import Base, engine
from app.db.session import SessionLocal
from app.api.models.neighborhood import Neighborhood
from app.api.models.specialty import Specialty
from app.api.services.auth_service import AuthService
from app.api.services.avatar_storage import AvatarStorage, get_avatar_storage
from app.api.services.reference_service import ReferenceService
from app.core.security import criar_token
from app.main import app as fastapi_app


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(fastapi_app) as c:
        yield c


def _headers(user):
    return {"Authorization": f"Bearer {criar_token({'sub': str(user.id)})}"}


@pytest.fixture
def user(db):
    return AuthService.create_user(db, "ana@example.com", "segredo123", "Ana Lima")


@pytest.fixture
def other_user(db):
    return AuthService.create_user(db, "bruno@example.com", "segredo456", "Bruno")


@pytest.fixture
def auth_headers(user):
    return _headers(user)


@pytest.fixture
def other_headers(other_user):
    return _headers(other_user)


@pytest.fixture
def specialty(db):
    return ReferenceService.get_or_create(db, Specialty, "Cardiologia")


@pytest.fixture
def centro(db):
    return ReferenceService.get_or_create(db, Neighborhood, "Centro")


@pytest.fixture
def savassi(db):
    return ReferenceService.get_or_create(db, Neighborhood, "Savassi")


@pytest.fixture
def s3_client():
    client = MagicMock()
    client.generate_presigned_url.side_effect = lambda op, Params, ExpiresIn: (
        f"https://s3.example.com/{Params['Bucket']}/{Params['Key']}?X-Amz-Expires={ExpiresIn}"
    )
    return client


@pytest.fixture
def avatar_storage(s3_client):
    storage = AvatarStorage(client=s3_client, bucket="avatars-test")
    fastapi_app.dependency_overrides[get_avatar_storage] = lambda: storage
    yield storage
    fastapi_app.dependency_overrides.pop(get_avatar_storage, None)
