from __future__ import annotations

from pydantic import BaseModel, Field

from .blogs import AuthorSummary


class CommentCreate(BaseModel):
    blog_id: str
    comment: str = ""
    replying_to: str | None = None


class CommentPublic(BaseModel):
    id: str
    blog_id: str
    comment: str
    commentedAt: str
    commented_by: AuthorSummary
    parent: str | None = None
    is_reply: bool
    children: list[str]


class CommentsRequest(BaseModel):
    blog_id: str
    skip: int = Field(default=0, ge=0)


class RepliesRequest(BaseModel):
    comment_id: str
    skip: int = Field(default=0, ge=0)


class CommentList(BaseModel):
    comments: list[CommentPublic]


class ReplyList(BaseModel):
    replies: list[CommentPublic]
