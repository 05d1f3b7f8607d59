from __future__ import annotations

from typing import Optional

from ..models import User
from .base import RedisStore


class UserStore(RedisStore):
    """Users are hashes at ``user:{id}``; email and username are unique through ``SET NX`` indexes."""

    async def next_id(self) -> str:
        return str(await self.redis.incr("users:seq"))

    async def reserve_email(self, email: str, user_id: str) -> bool:
        return bool(await self.redis.set(f"user:byemail:{email}", user_id, nx=True))

    async def reserve_username(self, username: str, user_id: str) -> bool:
        return bool(await self.redis.set(f"user:byname:{username}", user_id, nx=True))

    async def release(self, email: str, username: str | None = None) -> None:
        keys = [f"user:byemail:{email}"]
        if username:
            keys.append(f"user:byname:{username}")
        await self.redis.delete(*keys)

    async def save(self, user: User) -> User:
        await self.redis.hset(f"user:{user.id}", mapping=user.to_redis())
        await self.redis.sadd("users", user.id)
        return user

    async def get(self, user_id: str) -> Optional[User]:
        return User.from_redis(await self.redis.hgetall(f"user:{user_id}"))

    async def get_by_email(self, email: str) -> Optional[User]:
        uid = await self.redis.get(f"user:byemail:{email}")
        return await self.get(uid) if uid else None

    async def get_by_username(self, username: str) -> Optional[User]:
        uid = await self.redis.get(f"user:byname:{username}")
        return await self.get(uid) if uid else None

    async def increment(self, user_id: str, field: str, amount: int = 1) -> int:
        return await self.redis.hincrby(f"user:{user_id}", field, amount)

    async def add_blog(self, user_id: str, blog_id: str) -> None:
        await self.redis.rpush(f"user:{user_id}:blogs", blog_id)

    async def blogs(self, user_id: str) -> list[str]:
        return await self.redis.lrange(f"user:{user_id}:blogs", 0, -1)

    async def search(self, query: str, limit: int = 50) -> list[User]:
        needle = query.lower()
        ids = sorted(await self.redis.smembers("users"), key=int)
        found: list[User] = []
        for data in await self._load_many([f"user:{uid}" for uid in ids]):
            user = User.from_redis(data)
            if needle in user.username.lower():
                found.append(user)
                if len(found) >= limit:
                    break
        return found
