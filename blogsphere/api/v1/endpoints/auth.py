from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ....core.runtime import get_redis
from ....core.federated import get_identity_verifier
from ....schemas.auth import AuthResponse, GoogleAuthRequest, SigninRequest, SignupRequest
from ....services import identity


router = APIRouter()


@router.post("/signup", response_model=AuthResponse)
async def signup(payload: SignupRequest, redis: Any = Depends(get_redis)) -> dict[str, Any]:
    user = await identity.signup(redis, payload.fullname, payload.email, payload.password)
    return identity.auth_payload(user)


@router.post("/signin", response_model=AuthResponse)
async def signin(payload: SigninRequest, redis: Any = Depends(get_redis)) -> dict[str, Any]:
    user = await identity.signin(redis, payload.email, payload.password)
    return identity.auth_payload(user)


@router.post("/google-auth", response_model=AuthResponse)
async def google_auth(
    payload: GoogleAuthRequest,
    redis: Any = Depends(get_redis),
    verifier: Any = Depends(get_identity_verifier),
) -> dict[str, Any]:
    user = await identity.federated_sign_in(redis, verifier, payload.access_token)
    return identity.auth_payload(user)
