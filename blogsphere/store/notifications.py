from __future__ import annotations

from typing import Optional

from ..models import Notification
from .base import RedisStore, iso_score


def _feed_key(user_id: str) -> str:
    return f"user:{user_id}:notifications"


def _like_key(blog_id: str, user_id: str) -> str:
    return f"like:{blog_id}:{user_id}"


class NotificationStore(RedisStore):
    """
    Notifications are hashes at ``notification:{id}``, fanned into the
    recipient's feed (sorted set by creation time). A like notification is
    also pointed to by ``like:{blog_id}:{user_id}``, claimed with ``SET NX``
    before the notification is written, so its presence answers "has this
    user liked this post".
    """

    async def next_id(self) -> str:
        return str(await self.redis.incr("notifications:seq"))

    async def save(self, notification: Notification) -> Notification:
        await self.redis.hset(f"notification:{notification.id}", mapping=notification.to_redis())
        await self.redis.zadd(
            _feed_key(notification.notification_for),
            {notification.id: iso_score(notification.created_at)},
        )
        return notification

    async def get(self, notification_id: str) -> Optional[Notification]:
        return Notification.from_redis(await self.redis.hgetall(f"notification:{notification_id}"))

    async def claim_like(self, blog_id: str, user_id: str, notification_id: str) -> bool:
        """Mark the like before its notification exists; False if it was already there."""
        return bool(await self.redis.set(_like_key(blog_id, user_id), notification_id, nx=True))

    async def find_like(self, blog_id: str, user_id: str) -> Optional[Notification]:
        nid = await self.redis.get(_like_key(blog_id, user_id))
        return await self.get(nid) if nid else None

    async def delete(self, notification: Notification) -> bool:
        removed = await self.redis.delete(f"notification:{notification.id}")
        await self.redis.zrem(_feed_key(notification.notification_for), notification.id)
        if notification.type == "like":
            await self.redis.delete(_like_key(notification.blog, notification.user))
        return bool(removed)

    async def feed(self, user_id: str, type_filter: str = "all") -> list[Notification]:
        ids = await self.redis.zrevrange(_feed_key(user_id), 0, -1)
        docs = await self._load_many([f"notification:{nid}" for nid in ids])
        items = [Notification.from_redis(d) for d in docs]
        # actions on your own posts are not news
        items = [n for n in items if n.user != user_id]
        if type_filter != "all":
            items = [n for n in items if n.type == type_filter]
        return items

    async def mark_seen(self, notifications: list[Notification]) -> None:
        for n in notifications:
            await self.redis.hset(f"notification:{n.id}", mapping={"seen": "1"})
