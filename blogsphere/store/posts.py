from __future__ import annotations

from typing import Optional

from ..models import Post
from .base import RedisStore, iso_score

PUBLISHED = "blogs:published"


def _tag_key(tag: str) -> str:
    return f"blogs:tag:{tag}"


def _author_key(user_id: str) -> str:
    return f"user:{user_id}:published"


class PostStore(RedisStore):
    """
    Posts are hashes at ``blog:{blog_id}``.

    Published posts are indexed in sorted sets scored by publish time: one
    global, one per tag and one per author. Drafts are in none of them.
    """

    async def get(self, blog_id: str) -> Optional[Post]:
        return Post.from_redis(await self.redis.hgetall(f"blog:{blog_id}"))

    async def get_many(self, blog_ids: list[str]) -> list[Post]:
        docs = await self._load_many([f"blog:{bid}" for bid in blog_ids])
        return [Post.from_redis(d) for d in docs]

    async def save(self, post: Post, previous: Post | None = None, fields: tuple[str, ...] = ()) -> Post:
        """Write the post; with ``fields`` only those are written so live counters are left alone."""
        mapping = post.to_redis()
        if fields:
            mapping = {k: v for k, v in mapping.items() if k in fields}
        await self.redis.hset(f"blog:{post.blog_id}", mapping=mapping)
        await self._reindex(post, previous)
        return post

    async def _reindex(self, post: Post, previous: Post | None) -> None:
        if previous is not None and not previous.draft:
            await self.redis.zrem(PUBLISHED, previous.blog_id)
            await self.redis.zrem(_author_key(previous.author), previous.blog_id)
            for tag in previous.tags:
                await self.redis.zrem(_tag_key(tag), previous.blog_id)
        if post.draft:
            return
        score = {post.blog_id: iso_score(post.published_at)}
        await self.redis.zadd(PUBLISHED, score)
        await self.redis.zadd(_author_key(post.author), score)
        for tag in post.tags:
            await self.redis.zadd(_tag_key(tag), score)

    async def increment(self, blog_id: str, field: str, amount: int = 1) -> int:
        return await self.redis.hincrby(f"blog:{blog_id}", field, amount)

    async def add_comment(self, blog_id: str, comment_id: str) -> None:
        await self.redis.rpush(f"blog:{blog_id}:comments", comment_id)

    async def comment_ids(self, blog_id: str) -> list[str]:
        return await self.redis.lrange(f"blog:{blog_id}:comments", 0, -1)

    async def count_published(self) -> int:
        return await self.redis.zcard(PUBLISHED)

    async def latest(self, page: int, limit: int) -> list[Post]:
        start = (page - 1) * limit
        ids = await self.redis.zrevrange(PUBLISHED, start, start + limit - 1)
        return await self.get_many(ids)

    async def published(self) -> list[Post]:
        return await self.get_many(await self.redis.zrevrange(PUBLISHED, 0, -1))

    async def trending(self, limit: int) -> list[Post]:
        # published() is newest first and sort is stable, so recency breaks ties
        posts = await self.published()
        posts.sort(key=lambda p: (p.total_reads, p.total_likes), reverse=True)
        return posts[:limit]

    async def matching(
        self,
        tag: str | None = None,
        query: str | None = None,
        author: str | None = None,
        eliminate: str | None = None,
    ) -> list[str]:
        """Ids of published posts for exactly one filter, newest first. Precedence: tag, query, author."""
        if tag:
            ids = await self.redis.zrevrange(_tag_key(tag.lower()), 0, -1)
            return [bid for bid in ids if bid != eliminate]
        if query:
            needle = query.lower()
            return [p.blog_id for p in await self.published() if needle in p.title.lower()]
        if author:
            return await self.redis.zrevrange(_author_key(author), 0, -1)
        return []

    async def search(self, page: int, limit: int, **filters: str | None) -> list[Post]:
        ids = await self.matching(**filters)
        start = (page - 1) * limit
        return await self.get_many(ids[start:start + limit])
