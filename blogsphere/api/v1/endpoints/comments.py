from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ....core.runtime import get_redis
from ....core.security import require_user_id
from ....schemas.comments import (
    CommentCreate,
    CommentList,
    CommentPublic,
    CommentsRequest,
    RepliesRequest,
    ReplyList,
)
from ....services import comments


router = APIRouter()


@router.post("/add-comment", response_model=CommentPublic)
async def add_comment(
    payload: CommentCreate,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> CommentPublic:
    return await comments.add_comment(redis, user_id, payload.blog_id, payload.comment, payload.replying_to)


@router.post("/get-blog-comments", response_model=CommentList)
async def get_blog_comments(payload: CommentsRequest, redis: Any = Depends(get_redis)) -> CommentList:
    return CommentList(comments=await comments.blog_comments(redis, payload.blog_id, payload.skip))


@router.post("/get-replies", response_model=ReplyList)
async def get_replies(payload: RepliesRequest, redis: Any = Depends(get_redis)) -> ReplyList:
    return ReplyList(replies=await comments.replies(redis, payload.comment_id, payload.skip))
