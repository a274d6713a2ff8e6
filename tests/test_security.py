from datetime import datetime, timedelta, timezone

import jwt
import pytest

from photogram.core.config import settings
from photogram.core.security import TokenError, decode_session_token

SIGNING_KEY = "test-signing-key-with-enough-entropy-0123456789"


@pytest.fixture(autouse=True)
def _hs256_settings(monkeypatch):
    monkeypatch.setattr(settings, "auth_jwt_key", SIGNING_KEY)
    monkeypatch.setattr(settings, "auth_jwt_algorithm", "HS256")
    monkeypatch.setattr(settings, "auth_jwt_issuer", None)


def _token(**claims) -> str:
    payload = {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    payload.update(claims)
    return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")


def test_decode_returns_subject_and_name() -> None:
    claims = decode_session_token(_token(sub="user_2abc", name="  Alice  "))

    assert claims.subject == "user_2abc"
    assert claims.name == "Alice"


def test_blank_name_is_dropped() -> None:
    claims = decode_session_token(_token(sub="user_2abc", name="   "))

    assert claims.name is None


def test_expired_token_is_rejected() -> None:
    token = _token(sub="user_2abc", exp=datetime.now(timezone.utc) - timedelta(minutes=5))

    with pytest.raises(TokenError):
        decode_session_token(token)


def test_token_without_subject_is_rejected() -> None:
    with pytest.raises(TokenError):
        decode_session_token(_token(name="Alice"))


def test_wrong_signature_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "user_2abc", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "another-signing-key-with-enough-entropy-987654",
        algorithm="HS256",
    )

    with pytest.raises(TokenError):
        decode_session_token(token)
