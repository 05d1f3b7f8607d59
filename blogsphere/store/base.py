from __future__ import annotations

import datetime as dt
from typing import Any

from ..core.errors import StoreUnavailable


def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def iso_score(value: str) -> float:
    return dt.datetime.fromisoformat(value).timestamp()


class RedisStore:
    def __init__(self, redis: Any) -> None:
        if redis is None:
            raise StoreUnavailable()
        self.redis = redis

    async def _load_many(self, keys: list[str]) -> list[dict[str, str]]:
        out = []
        for key in keys:
            data = await self.redis.hgetall(key)
            if data:
                out.append(data)
        return out
