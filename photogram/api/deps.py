from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from photogram.core.config import settings
from photogram.core.security import SessionClaims, TokenError, decode_session_token
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.repositories.user_repo import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def _extract_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    cookie = request.cookies.get(settings.auth_session_cookie)
    return cookie or None


def get_optional_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionClaims | None:
    token = _extract_token(request, credentials)
    if not token:
        return None
    try:
        return decode_session_token(token)
    except TokenError:
        return None


def get_session_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionClaims:
    token = _extract_token(request, credentials)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    try:
        return decode_session_token(token)
    except TokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session token") from exc


def get_current_user(
    claims: SessionClaims = Depends(get_session_claims),
    db: Session = Depends(get_db),
) -> User:
    user = UserRepository(db).get_by_external_id(claims.subject)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_optional_user(
    claims: SessionClaims | None = Depends(get_optional_claims),
    db: Session = Depends(get_db),
) -> User | None:
    if claims is None:
        return None
    return UserRepository(db).get_by_external_id(claims.subject)
