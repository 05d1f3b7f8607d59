from __future__ import annotations

from typing import Any

from ..core.errors import NotFound
from ..models import User
from ..schemas.blogs import AuthorSummary
from ..schemas.users import AccountInfo, ProfilePublic
from ..store.users import UserStore

USER_SEARCH_LIMIT = 50


def summarize(user: User | None) -> AuthorSummary:
    if user is None:
        return AuthorSummary(fullname="", username="", profile_img="")
    return AuthorSummary(fullname=user.fullname, username=user.username, profile_img=user.profile_img)


class AuthorCache:
    """Memoises author lookups for the lifetime of one request."""

    def __init__(self, users: UserStore) -> None:
        self.users = users
        self._seen: dict[str, AuthorSummary] = {}

    async def get(self, user_id: str) -> AuthorSummary:
        if user_id not in self._seen:
            self._seen[user_id] = summarize(await self.users.get(user_id))
        return self._seen[user_id]


async def get_profile(redis: Any, username: str) -> ProfilePublic:
    user = await UserStore(redis).get_by_username(username)
    if user is None:
        raise NotFound("User not found")
    # password, google_auth and the post list stay server side
    return ProfilePublic(
        id=user.id,
        fullname=user.fullname,
        email=user.email,
        username=user.username,
        profile_img=user.profile_img,
        bio=user.bio,
        account_info=AccountInfo(total_posts=user.total_posts, total_reads=user.total_reads),
        joinedAt=user.joined_at,
    )


async def search_users(redis: Any, query: str) -> list[AuthorSummary]:
    if not query:
        return []
    users = await UserStore(redis).search(query, limit=USER_SEARCH_LIMIT)
    return [summarize(u) for u in users]
