"""Security and authentication utilities.

Access tokens are issued by the association identity service; this service
only verifies them and reads the caller's identity out of the claims.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, Request

from assocvote.core import config
from assocvote.db.models import UserRole
from assocvote.schemas.auth import CurrentUser

ACCESS_TOKEN_COOKIE = "access_token"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token (tests and local tooling)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=8))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)


def _extract_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def get_current_user(request: Request) -> CurrentUser:
    """Verify the bearer token and return the caller's identity."""
    token = _extract_token(request)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        return CurrentUser(
            id=payload["sub"],
            role=payload.get("role", UserRole.MEMBER.value),
            association_id=payload["association_id"],
        )
    except (KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token claims")


def verify_admin(request: Request) -> CurrentUser:
    """Same as get_current_user, but only lets association admins through."""
    user = get_current_user(request)
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Not authorized")
    return user
