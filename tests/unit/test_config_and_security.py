"""Settings validation, password hashing and bearer tokens."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from erp.core.config import Settings, get_settings
from erp.core.constants import SYSTEM_USER_ID
from erp.infrastructure.security.jwt import create_access_token, verify_token
from erp.infrastructure.security.password import hash_password, verify_password


def test_settings_require_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None, database_url="postgresql+asyncpg://x@y/z")
    assert settings.user_id_header == "X-User-Id"
    assert settings.system_user_id == SYSTEM_USER_ID
    assert settings.default_page_size == 50


def test_settings_reject_page_size_above_max() -> None:
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            database_url="postgresql+asyncpg://x@y/z",
            default_page_size=100,
            max_page_size=10,
        )


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("correct horse battery staple")
    assert hashed != "correct horse battery staple"
    assert verify_password("correct horse battery staple", hashed)
    assert not verify_password("wrong", hashed)


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = hash_password(base + "a")
    assert not verify_password(base + "b", hashed)


def test_verify_password_malformed_hash_returns_false() -> None:
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_roundtrip_carries_subject_and_claims() -> None:
    token = create_access_token("user-1", extra_claims={"role": "admin"})
    payload = verify_token(token)
    assert payload["sub"] == "user-1"
    assert payload["role"] == "admin"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-10))
    with pytest.raises(ValueError):
        verify_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not.a.jwt")


def test_tokens_disabled_without_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError):
            create_access_token("user-1")
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()
