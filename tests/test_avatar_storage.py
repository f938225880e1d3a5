from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from app.api.services.avatar_storage import AvatarStorage
from app.core.exceptions import StorageError, ValidationFailed


def storage(client=None, **kwargs):
    return AvatarStorage(client=client or MagicMock(), bucket="avatars-test", **kwargs)


def test_upload_puts_object_under_user_key():
    client = MagicMock()

    key = storage(client).upload(7, "perfil.webp", b"img", "image/webp")

    assert key.startswith("avatars/7-")
    assert key.endswith(".webp")
    client.put_object.assert_called_once()
    sent = client.put_object.call_args.kwargs
    assert (sent["Bucket"], sent["Key"], sent["Body"]) == ("avatars-test", key, b"img")


def test_extension_comes_from_content_type_not_filename():
    key = storage().upload(7, "foto.exe", b"img", "image/jpeg")

    assert key.endswith(".jpg")


def test_extension_falls_back_to_filename_suffix():
    client = MagicMock()

    key = storage(client).upload(7, "retrato.JPEG", b"img")

    assert key.endswith(".jpg")
    assert client.put_object.call_args.kwargs["ContentType"] == "image/jpeg"


@pytest.mark.parametrize("filename", ["sem-extensao", "a./../../x/pwn", "script.svg"])
def test_unknown_extension_without_content_type_is_rejected(filename):
    client = MagicMock()

    with pytest.raises(ValidationFailed) as exc:
        storage(client).upload(7, filename, b"img")

    assert "avatar" in exc.value.errors
    client.put_object.assert_not_called()


def test_empty_and_oversized_files_are_rejected(monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "AVATAR_MAX_BYTES", 4)

    with pytest.raises(ValidationFailed):
        storage().upload(7, "a.png", b"", "image/png")
    with pytest.raises(ValidationFailed) as exc:
        storage().upload(7, "a.png", b"12345", "image/png")

    assert exc.value.errors == {"avatar": "Imagem muito grande"}


def test_client_error_becomes_storage_error():
    client = MagicMock()
    client.put_object.side_effect = ClientError({"Error": {"Code": "AccessDenied", "Message": "negado"}}, "PutObject")

    with pytest.raises(StorageError) as exc:
        storage(client).upload(7, "a.png", b"img", "image/png")

    assert exc.value.message.startswith("Erro ao enviar imagem")


def test_public_url_uses_bucket_domain_when_configured():
    client = MagicMock()

    url = storage(client, public_base_url="https://cdn.example.com/").public_url("avatars/7-1.png")

    assert url == "https://cdn.example.com/avatars/7-1.png"
    client.generate_presigned_url.assert_not_called()


def test_public_url_presigns_when_bucket_is_private():
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://s3/assinada"

    assert storage(client).public_url("avatars/7-1.png") == "https://s3/assinada"

    args, kwargs = client.generate_presigned_url.call_args
    assert args == ("get_object",)
    assert kwargs["Params"]["Key"] == "avatars/7-1.png"
    assert kwargs["Params"]["Bucket"] == "avatars-test"
