from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Iterable

import redis.asyncio as redis
from redis.exceptions import RedisError
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core import runtime
from .core.errors import BlogError
from .core.memory_redis import AsyncMemoryRedis


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    origins_env = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173")
    parts: Iterable[str] = (o.strip() for o in origins_env.split(","))
    return [o for o in parts if o]


def make_redis_client() -> Any:
    use_fake = os.getenv("USE_FAKE_REDIS", "0") == "1"
    redis_url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    if use_fake or redis_url.startswith("memory://"):
        logger.info("using in-process document store")
        return AsyncMemoryRedis()
    return redis.from_url(redis_url, decode_responses=True)


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[override]
    client = make_redis_client()
    try:
        await client.ping()
        logger.info("connected to document store")
    except RedisError as e:
        # keep booting; requests report the failure until the store comes back
        logger.error("document store unreachable: %s", e)
    runtime.redis_client = client
    yield
    runtime.redis_client = None
    await client.aclose()


app = FastAPI(title="Blogsphere Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.get("/healthz")
async def healthz() -> dict[str, Any]:
    status: dict[str, Any] = {"ok": True}
    if runtime.redis_client is None:
        status["redis"] = {"connected": False, "message": "redis not initialized"}
        return status
    try:
        pong = await runtime.redis_client.ping()
        status["redis"] = {"connected": bool(pong)}
    except RedisError as e:  # pragma: no cover - diagnostic only
        status["redis"] = {"connected": False, "error": str(e)}
    return status


from .api.v1.endpoints import auth, blogs, comments, notifications, uploads, users  # noqa: E402

app.include_router(uploads.router, tags=["uploads"])  # /get-upload-url
app.include_router(auth.router, tags=["auth"])  # /signup, /signin, /google-auth
app.include_router(blogs.router, tags=["blogs"])  # /latest-blogs, /create-blog, /like-blog ...
app.include_router(comments.router, tags=["comments"])  # /add-comment, /get-blog-comments
app.include_router(users.router, tags=["users"])  # /search-users, /get-profile
app.include_router(notifications.router, tags=["notifications"])  # /notifications


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
