from __future__ import annotations

from typing import Any

from ..schemas.notifications import NotificationPublic
from ..store.comments import CommentStore
from ..store.notifications import NotificationStore
from ..store.posts import PostStore
from ..store.users import UserStore
from .profiles import AuthorCache

NOTIFICATIONS_PAGE_SIZE = 10


async def feed(redis: Any, user_id: str, page: int = 1, type_filter: str = "all") -> list[NotificationPublic]:
    """One page of the caller's activity feed, newest first. Returned items are marked seen."""
    store = NotificationStore(redis)
    posts = PostStore(redis)
    comments = CommentStore(redis)
    authors = AuthorCache(UserStore(redis))

    start = (page - 1) * NOTIFICATIONS_PAGE_SIZE
    items = (await store.feed(user_id, type_filter))[start:start + NOTIFICATIONS_PAGE_SIZE]
    out: list[NotificationPublic] = []
    for n in items:
        post = await posts.get(n.blog)
        comment = await comments.get(n.comment) if n.comment else None
        out.append(NotificationPublic(
            id=n.id,
            type=n.type,
            blog_id=n.blog,
            blog_title=post.title if post else "",
            user=await authors.get(n.user),
            comment=comment.comment if comment else None,
            seen=n.seen,
            createdAt=n.created_at,
        ))
    await store.mark_seen(items)
    return out


async def count(redis: Any, user_id: str, type_filter: str = "all") -> int:
    return len(await NotificationStore(redis).feed(user_id, type_filter))


async def has_unseen(redis: Any, user_id: str) -> bool:
    return any(not n.seen for n in await NotificationStore(redis).feed(user_id))
