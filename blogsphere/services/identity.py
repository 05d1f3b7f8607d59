from __future__ import annotations

import logging
import random
import secrets
from typing import Any

from fastapi.concurrency import run_in_threadpool

from ..core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    ValidationFailed,
    WrongProvider,
)
from ..core.security import (
    hash_password,
    is_strong_password,
    is_valid_email,
    issue_session,
    verify_password,
)
from ..models import User
from ..store.base import now_iso
from ..store.users import UserStore


logger = logging.getLogger(__name__)

AVATAR_COLLECTIONS = ("notionists-neutral", "adventurer-neutral", "fun-emoji")


def default_avatar(seed: str) -> str:
    return f"https://api.dicebear.com/6.x/{random.choice(AVATAR_COLLECTIONS)}/svg?seed={seed}"


def auth_payload(user: User) -> dict[str, Any]:
    return {
        "access_token": issue_session(user.id),
        "profile_img": user.profile_img,
        "username": user.username,
        "fullname": user.fullname,
    }


async def generate_username(users: UserStore, email: str, user_id: str) -> str:
    """Email local part, with a random suffix appended until the name is free."""
    base = email.split("@")[0]
    username = base
    while not await users.reserve_username(username, user_id):
        username = base + secrets.token_urlsafe(8)[:5]
    return username


async def _create_user(users: UserStore, fullname: str, email: str, **fields: Any) -> User:
    user_id = await users.next_id()
    if not await users.reserve_email(email, user_id):
        raise DuplicateEmail()
    username = None
    try:
        username = await generate_username(users, email, user_id)
        fields.setdefault("profile_img", default_avatar(username))
        user = User(
            id=user_id,
            fullname=fullname,
            email=email,
            username=username,
            joined_at=now_iso(),
            **fields,
        )
        return await users.save(user)
    except Exception:
        # a half-created account must not keep its email or username taken
        logger.exception("creating user %s failed, releasing %s", user_id, email)
        await users.release(email, username)
        raise


async def signup(redis: Any, fullname: str, email: str, password: str) -> User:
    if len(fullname) < 3:
        raise ValidationFailed("Fullname must be at least 3 characters long")
    if not email:
        raise ValidationFailed("Email must be entered")
    if not is_valid_email(email):
        raise ValidationFailed("Invalid email")
    if not is_strong_password(password):
        raise ValidationFailed(
            "Password must be 6 to 20 characters long and contain at least "
            "1 uppercase letter, 1 lowercase letter and 1 number"
        )
    user = await _create_user(UserStore(redis), fullname, email, password=hash_password(password))
    logger.info("user %s signed up as %s", user.id, user.username)
    return user


async def signin(redis: Any, email: str, password: str) -> User:
    user = await UserStore(redis).get_by_email(email)
    if user is None:
        raise NotFound("Email not found", status_code=403)
    if user.google_auth:
        raise WrongProvider("Account was signed in with google. Try logging in using google account")
    if not user.password or not verify_password(password, user.password):
        raise InvalidCredentials()
    logger.info("user %s signed in", user.id)
    return user


async def federated_sign_in(redis: Any, verifier: Any, provider_token: str) -> User:
    claims = await run_in_threadpool(verifier.verify, provider_token)
    email = claims.get("email")
    if not email:
        raise ValidationFailed("Identity provider returned no email")
    users = UserStore(redis)
    user = await users.get_by_email(email)
    if user is not None:
        if not user.google_auth:
            raise WrongProvider(
                "This email was signed up without google. Please log in with password to access the account"
            )
        return user

    fields: dict[str, Any] = {"google_auth": True}
    picture = claims.get("picture")
    if picture:
        # provider hands out a 96px thumbnail; ask for the larger rendition
        fields["profile_img"] = picture.replace("s96-c", "s384-c")
    user = await _create_user(users, claims.get("name") or email.split("@")[0], email, **fields)
    logger.info("federated user %s created as %s", user.id, user.username)
    return user
