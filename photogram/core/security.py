from dataclasses import dataclass

import jwt

from photogram.core.config import settings


class TokenError(Exception):
    pass


@dataclass(frozen=True)
class SessionClaims:
    subject: str
    name: str | None = None


def decode_session_token(token: str) -> SessionClaims:
    """Verify a session token issued by the identity provider.

    Only the signature, expiry and (optionally) issuer are checked; the
    provider owns session lifetime and revocation.
    """
    options = {"require": ["sub", "exp"]}
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_key,
            algorithms=[settings.auth_jwt_algorithm],
            issuer=settings.auth_jwt_issuer or None,
            leeway=settings.auth_jwt_leeway_seconds,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise TokenError("invalid token") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise TokenError("missing subject")

    name = payload.get(settings.auth_name_claim)
    if not isinstance(name, str) or not name.strip():
        name = None
    return SessionClaims(subject=subject, name=name.strip() if name else None)
