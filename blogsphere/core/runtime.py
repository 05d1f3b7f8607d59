from __future__ import annotations

from typing import Any

from .errors import StoreUnavailable

# Store client set by the app lifespan; kept here to avoid circular imports.
redis_client: Any | None = None


async def get_redis() -> Any:
    """FastAPI dependency handing the live store client to a handler."""
    if redis_client is None:
        raise StoreUnavailable()
    return redis_client
