from __future__ import annotations

import logging
from typing import Any

from ..core.errors import NotFound, ValidationFailed
from ..models import Comment, Notification
from ..schemas.comments import CommentPublic
from ..store.base import now_iso
from ..store.comments import CommentStore
from ..store.notifications import NotificationStore
from ..store.posts import PostStore
from ..store.users import UserStore
from .profiles import AuthorCache


logger = logging.getLogger(__name__)

COMMENTS_PAGE_SIZE = 5


async def _public(redis: Any, comments: list[Comment]) -> list[CommentPublic]:
    store = CommentStore(redis)
    authors = AuthorCache(UserStore(redis))
    return [
        CommentPublic(
            id=c.id,
            blog_id=c.blog_id,
            comment=c.comment,
            commentedAt=c.commented_at,
            commented_by=await authors.get(c.commented_by),
            parent=c.parent,
            is_reply=c.is_reply,
            children=await store.children(c.id),
        )
        for c in comments
    ]


async def add_comment(redis: Any, user_id: str, blog_id: str, text: str, replying_to: str | None = None) -> CommentPublic:
    """
    Store a comment (or a reply when ``replying_to`` names a comment) and
    notify the post's author. Top-level comments go on the post's comment
    list; replies go on their parent's children list.
    """
    if not text.strip():
        raise ValidationFailed("Write something to leave a comment")
    posts = PostStore(redis)
    comments = CommentStore(redis)
    notifications = NotificationStore(redis)

    post = await posts.get(blog_id)
    if post is None:
        raise NotFound("Blog not found")
    parent = None
    if replying_to:
        parent = await comments.get(replying_to)
        if parent is None or parent.blog_id != blog_id:
            raise NotFound("Comment not found")

    comment = await comments.save(Comment(
        id=await comments.next_id(),
        blog_id=blog_id,
        blog_author=post.author,
        comment=text,
        commented_by=user_id,
        parent=parent.id if parent else None,
        is_reply=parent is not None,
        commented_at=now_iso(),
    ))

    if parent is None:
        await posts.add_comment(blog_id, comment.id)
        await posts.increment(blog_id, "total_parent_comments")
    else:
        await comments.add_child(parent.id, comment.id)
    await posts.increment(blog_id, "total_comments")

    await notifications.save(Notification(
        id=await notifications.next_id(),
        type="comment",
        blog=blog_id,
        notification_for=post.author,
        user=user_id,
        comment=comment.id,
        created_at=now_iso(),
    ))
    if parent is not None and parent.commented_by != user_id:
        await notifications.save(Notification(
            id=await notifications.next_id(),
            type="reply",
            blog=blog_id,
            notification_for=parent.commented_by,
            user=user_id,
            comment=comment.id,
            created_at=now_iso(),
        ))

    logger.info("comment %s added to %s by %s", comment.id, blog_id, user_id)
    return (await _public(redis, [comment]))[0]


async def blog_comments(redis: Any, blog_id: str, skip: int = 0) -> list[CommentPublic]:
    """Top-level comments, newest first."""
    ids = list(reversed(await PostStore(redis).comment_ids(blog_id)))
    page = await CommentStore(redis).get_many(ids[skip:skip + COMMENTS_PAGE_SIZE])
    return await _public(redis, page)


async def replies(redis: Any, comment_id: str, skip: int = 0) -> list[CommentPublic]:
    """Replies to one comment, oldest first."""
    store = CommentStore(redis)
    if await store.get(comment_id) is None:
        raise NotFound("Comment not found")
    ids = await store.children(comment_id)
    return await _public(redis, await store.get_many(ids[skip:skip + COMMENTS_PAGE_SIZE]))
