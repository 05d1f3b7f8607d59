from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ....core.runtime import get_redis
from ....schemas.users import ProfilePublic, ProfileRequest, UserSearchRequest, UserSearchResponse
from ....services import profiles


router = APIRouter()


@router.post("/search-users", response_model=UserSearchResponse)
async def search_users(payload: UserSearchRequest, redis: Any = Depends(get_redis)) -> UserSearchResponse:
    return UserSearchResponse(users=await profiles.search_users(redis, payload.query))


@router.post("/get-profile", response_model=ProfilePublic)
async def get_profile(payload: ProfileRequest, redis: Any = Depends(get_redis)) -> ProfilePublic:
    return await profiles.get_profile(redis, payload.username)
