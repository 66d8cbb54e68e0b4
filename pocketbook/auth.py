# pocketbook/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from . import config
from .errors import Unauthorized
from .schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

# Security scheme; the session cookie is accepted when no header is sent
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(user_id: int, username: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + timedelta(days=config.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(claims, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """Verify a token and return the identity it carries."""
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid authentication credentials")

    sub = payload.get("sub")
    username = payload.get("username")
    if sub is None or username is None:
        raise Unauthorized("Could not validate credentials")

    try:
        return CurrentUser(id=int(sub), username=username)
    except ValueError:
        raise Unauthorized("Could not validate credentials")


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Resolves the caller from a Bearer token or the session cookie.
    """
    token = credentials.credentials if credentials else request.cookies.get(config.COOKIE_NAME)
    if not token:
        raise Unauthorized("Not authenticated")
    return decode_access_token(token)
