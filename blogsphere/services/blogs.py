from __future__ import annotations

import logging
import re
import secrets
from typing import Any

from ..core.errors import DraftAccess, Forbidden, NotFound, ValidationFailed
from ..models import Notification, Post
from ..schemas.blogs import Activity, BlogCard, BlogCreate, BlogDetail, SearchCountRequest
from ..store.base import now_iso
from ..store.notifications import NotificationStore
from ..store.posts import PostStore
from ..store.users import UserStore
from .profiles import AuthorCache


logger = logging.getLogger(__name__)

LATEST_PAGE_SIZE = 5
TRENDING_LIMIT = 5
SEARCH_PAGE_SIZE = 2
MAX_DESCRIPTION = 200
MAX_TAGS = 10

EDITABLE_FIELDS = ("title", "des", "banner", "content", "tags", "draft", "updated_at")


def make_blog_id(title: str) -> str:
    slug = re.sub(r"\s+", "-", re.sub(r"[^a-zA-Z0-9]", " ", title).strip())
    return slug + secrets.token_urlsafe(15)


def normalize_tags(tags: list[str]) -> list[str]:
    """Lower-cased, stripped, blank ones dropped, first occurrence kept."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def validate_post(payload: BlogCreate) -> None:
    """Title is always required; the rest only once the post is published."""
    if not payload.title:
        raise ValidationFailed("You must provide a title")
    if payload.draft:
        return
    if not payload.des or len(payload.des) > MAX_DESCRIPTION:
        raise ValidationFailed(f"You must provide blog description under {MAX_DESCRIPTION} characters")
    if not payload.banner:
        raise ValidationFailed("You must provide blog banner to publish it")
    if not payload.content.blocks:
        raise ValidationFailed("There must be some blog content to publish it")
    if not payload.tags or len(payload.tags) > MAX_TAGS:
        raise ValidationFailed(f"Provide tags in order to publish the blog, Maximum is {MAX_TAGS}")


def _activity(post: Post) -> Activity:
    return Activity(
        total_likes=post.total_likes,
        total_comments=post.total_comments,
        total_reads=post.total_reads,
        total_parent_comments=post.total_parent_comments,
    )


async def _cards(redis: Any, posts: list[Post]) -> list[BlogCard]:
    authors = AuthorCache(UserStore(redis))
    return [
        BlogCard(
            blog_id=p.blog_id,
            title=p.title,
            des=p.des,
            banner=p.banner,
            tags=p.tags,
            activity=_activity(p),
            publishedAt=p.published_at,
            author=await authors.get(p.author),
        )
        for p in posts
    ]


async def latest(redis: Any, page: int) -> list[BlogCard]:
    return await _cards(redis, await PostStore(redis).latest(page, LATEST_PAGE_SIZE))


async def count_latest(redis: Any) -> int:
    return await PostStore(redis).count_published()


async def trending(redis: Any) -> list[BlogCard]:
    return await _cards(redis, await PostStore(redis).trending(TRENDING_LIMIT))


def _filters(req: Any) -> dict[str, str | None]:
    if not (req.tag or req.query or req.author):
        raise ValidationFailed("Provide a tag, query or author to search")
    return {"tag": req.tag, "query": req.query, "author": req.author}


async def search(redis: Any, req: Any) -> list[BlogCard]:
    posts = await PostStore(redis).search(
        req.page,
        req.limit or SEARCH_PAGE_SIZE,
        eliminate=req.eliminate_blog,
        **_filters(req),
    )
    return await _cards(redis, posts)


async def count_search(redis: Any, req: SearchCountRequest) -> int:
    return len(await PostStore(redis).matching(**_filters(req)))


async def get_blog(redis: Any, blog_id: str, draft: bool = False, mode: str | None = None) -> BlogDetail:
    posts = PostStore(redis)
    post = await posts.get(blog_id)
    if post is None:
        raise NotFound("Blog not found")
    if post.draft and not draft:
        raise DraftAccess()
    if mode != "edit" and not post.draft:
        post.total_reads = await posts.increment(blog_id, "total_reads")
        await UserStore(redis).increment(post.author, "total_reads")

    card = (await _cards(redis, [post]))[0]
    return BlogDetail(**card.model_dump(), content=post.content, draft=post.draft, author_id=post.author)


async def save_blog(redis: Any, author_id: str, payload: BlogCreate) -> str:
    tags = normalize_tags(payload.tags)
    payload = payload.model_copy(update={"tags": tags})
    validate_post(payload)
    posts = PostStore(redis)
    users = UserStore(redis)
    now = now_iso()

    if payload.id:
        existing = await posts.get(payload.id)
        if existing is None:
            raise NotFound("Blog not found")
        if existing.author != author_id:
            raise Forbidden("You can only edit your own blogs")
        updated = existing.model_copy(update={
            "title": payload.title,
            "des": payload.des,
            "banner": payload.banner,
            "content": payload.content.model_dump(),
            "tags": tags,
            "draft": payload.draft,
            "updated_at": now,
        })
        await posts.save(updated, previous=existing, fields=EDITABLE_FIELDS)
        if existing.draft != updated.draft:
            await users.increment(author_id, "total_posts", -1 if updated.draft else 1)
        logger.info("blog %s updated by %s", updated.blog_id, author_id)
        return updated.blog_id

    post = Post(
        blog_id=make_blog_id(payload.title),
        title=payload.title,
        des=payload.des,
        banner=payload.banner,
        content=payload.content.model_dump(),
        tags=tags,
        draft=payload.draft,
        author=author_id,
        published_at=now,
        updated_at=now,
    )
    await posts.save(post)
    if not post.draft:
        await users.increment(author_id, "total_posts")
    await users.add_blog(author_id, post.blog_id)
    logger.info("blog %s created by %s (draft=%s)", post.blog_id, author_id, post.draft)
    return post.blog_id


async def toggle_like(redis: Any, user_id: str, blog_id: str) -> tuple[bool, int]:
    """Flip the caller's like on a post; returns (liked_by_user, total_likes)."""
    posts = PostStore(redis)
    notifications = NotificationStore(redis)
    post = await posts.get(blog_id)
    if post is None:
        raise NotFound("Blog not found")

    existing = await notifications.find_like(blog_id, user_id)
    if existing is not None:
        if await notifications.delete(existing):
            return False, await posts.increment(blog_id, "total_likes", -1)
        return False, post.total_likes

    notification_id = await notifications.next_id()
    if not await notifications.claim_like(blog_id, user_id, notification_id):
        # a concurrent request already recorded this like
        return True, post.total_likes
    await notifications.save(Notification(
        id=notification_id,
        type="like",
        blog=blog_id,
        notification_for=post.author,
        user=user_id,
        created_at=now_iso(),
    ))
    return True, await posts.increment(blog_id, "total_likes")


async def is_liked(redis: Any, user_id: str, blog_id: str) -> bool:
    return await NotificationStore(redis).find_like(blog_id, user_id) is not None
