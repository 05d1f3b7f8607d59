from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional


class AsyncMemoryRedis:
    """In-process stand-in for the subset of ``redis.asyncio.Redis`` the stores use.

    Values come back as ``str`` the way a ``decode_responses=True`` client returns them.
    """

    def __init__(self) -> None:
        self._kv: Dict[str, str] = {}
        self._hash: Dict[str, Dict[str, str]] = {}
        self._sets: Dict[str, set] = {}
        self._lists: Dict[str, List[str]] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._kv.get(key)

    async def set(self, key: str, value: Any, nx: bool | None = None) -> bool | None:
        async with self._lock:
            if nx and key in self._kv:
                return None
            self._kv[key] = str(value)
            return True

    async def incr(self, key: str) -> int:
        async with self._lock:
            cur = int(self._kv.get(key, 0)) + 1
            self._kv[key] = str(cur)
            return cur

    async def delete(self, *keys: str) -> int:
        async with self._lock:
            removed = 0
            for key in keys:
                existed = False
                for store in (self._kv, self._hash, self._sets, self._lists, self._zsets):
                    if store.pop(key, None) is not None:
                        existed = True
                removed += int(existed)
            return removed

    # hashes

    async def hset(self, key: str, mapping: Dict[str, Any]) -> int:
        async with self._lock:
            h = self._hash.setdefault(key, {})
            added = sum(1 for f in mapping if f not in h)
            h.update({f: str(v) for f, v in mapping.items()})
            return added

    async def hgetall(self, key: str) -> Dict[str, str]:
        async with self._lock:
            return dict(self._hash.get(key, {}))

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        async with self._lock:
            h = self._hash.setdefault(key, {})
            cur = int(h.get(field, 0)) + amount
            h[field] = str(cur)
            return cur

    # sets

    async def sadd(self, key: str, *members: Any) -> int:
        async with self._lock:
            s = self._sets.setdefault(key, set())
            before = len(s)
            for m in members:
                s.add(str(m))
            return len(s) - before

    async def smembers(self, key: str) -> set:
        async with self._lock:
            return set(self._sets.get(key, set()))

    # lists

    async def rpush(self, key: str, *values: Any) -> int:
        async with self._lock:
            lst = self._lists.setdefault(key, [])
            lst.extend(str(v) for v in values)
            return len(lst)

    async def lrange(self, key: str, start: int, end: int) -> List[str]:
        async with self._lock:
            lst = self._lists.get(key, [])
            stop = len(lst) if end == -1 else end + 1
            return list(lst[start:stop])

    # sorted sets

    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        async with self._lock:
            z = self._zsets.setdefault(key, {})
            added = sum(1 for m in mapping if str(m) not in z)
            z.update({str(m): float(s) for m, s in mapping.items()})
            return added

    async def zrem(self, key: str, *members: Any) -> int:
        async with self._lock:
            z = self._zsets.setdefault(key, {})
            return sum(1 for m in members if z.pop(str(m), None) is not None)

    async def zcard(self, key: str) -> int:
        async with self._lock:
            return len(self._zsets.get(key, {}))

    async def zrevrange(self, key: str, start: int, end: int) -> List[str]:
        async with self._lock:
            z = self._zsets.get(key, {})
            # ties ordered by member descending, as redis does
            ordered = sorted(z.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
            stop = len(ordered) if end == -1 else end + 1
            return [m for m, _ in ordered[start:stop]]
