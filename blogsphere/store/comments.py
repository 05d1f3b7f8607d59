from __future__ import annotations

from typing import Optional

from ..models import Comment
from .base import RedisStore


class CommentStore(RedisStore):
    async def next_id(self) -> str:
        return str(await self.redis.incr("comments:seq"))

    async def save(self, comment: Comment) -> Comment:
        await self.redis.hset(f"comment:{comment.id}", mapping=comment.to_redis())
        return comment

    async def get(self, comment_id: str) -> Optional[Comment]:
        return Comment.from_redis(await self.redis.hgetall(f"comment:{comment_id}"))

    async def get_many(self, comment_ids: list[str]) -> list[Comment]:
        docs = await self._load_many([f"comment:{cid}" for cid in comment_ids])
        return [Comment.from_redis(d) for d in docs]

    async def add_child(self, parent_id: str, child_id: str) -> None:
        await self.redis.rpush(f"comment:{parent_id}:children", child_id)

    async def children(self, comment_id: str) -> list[str]:
        return await self.redis.lrange(f"comment:{comment_id}:children", 0, -1)
