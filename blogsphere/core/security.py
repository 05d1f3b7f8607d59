from __future__ import annotations

import logging
import os
import re
from typing import Any

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from ..store.users import UserStore
from .errors import InvalidToken, MissingToken
from .runtime import get_redis


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_ALGORITHM = "HS256"

EMAIL_RE = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$")
PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{6,20}$")


def get_secret_key() -> str:
    return os.getenv("SECRET_ACCESS_KEY", "blogsphere-dev-secret-change-me-in-production")


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.fullmatch(email) is not None


def is_strong_password(password: str) -> bool:
    """6-20 characters with at least one digit, one lowercase and one uppercase letter."""
    return PASSWORD_RE.fullmatch(password) is not None


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def issue_session(user_id: str) -> str:
    # no exp claim: a token stays valid for as long as the secret does
    return jwt.encode({"id": user_id}, get_secret_key(), algorithm=SESSION_ALGORITHM)


def verify_session(token: str | None) -> str:
    if not token:
        raise MissingToken()
    try:
        payload = jwt.decode(token, get_secret_key(), algorithms=[SESSION_ALGORITHM])
    except jwt.InvalidTokenError as exc:
        logger.warning("rejected session token: %s", exc)
        raise InvalidToken() from exc
    user_id = payload.get("id")
    if not user_id:
        raise InvalidToken()
    return str(user_id)


async def require_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    redis: Any = Depends(get_redis),
) -> str:
    if creds is None or not creds.scheme.lower().startswith("bearer"):
        raise MissingToken()
    user_id = verify_session(creds.credentials.strip())
    if await UserStore(redis).get(user_id) is None:
        logger.warning("session token for unknown user %s", user_id)
        raise InvalidToken()
    return user_id
