from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthorSummary(BaseModel):
    fullname: str
    username: str
    profile_img: str


class Activity(BaseModel):
    total_likes: int = 0
    total_comments: int = 0
    total_reads: int = 0
    total_parent_comments: int = 0


class BlogCard(BaseModel):
    blog_id: str
    title: str
    des: str
    banner: str
    tags: list[str]
    activity: Activity
    publishedAt: str
    author: AuthorSummary


class BlogDetail(BlogCard):
    content: dict[str, Any]
    draft: bool
    author_id: str


class BlogList(BaseModel):
    blogs: list[BlogCard]


class CountResponse(BaseModel):
    totalDocs: int


class PageRequest(BaseModel):
    page: int = Field(default=1, ge=1)


class SearchRequest(BaseModel):
    tag: str | None = None
    query: str | None = None
    author: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1, le=100)
    eliminate_blog: str | None = None


class SearchCountRequest(BaseModel):
    tag: str | None = None
    query: str | None = None
    author: str | None = None


class BlogContent(BaseModel):
    model_config = {"extra": "allow"}

    blocks: list[Any] = Field(default_factory=list)


class BlogCreate(BaseModel):
    title: str = ""
    des: str = ""
    banner: str = ""
    tags: list[str] = Field(default_factory=list)
    content: BlogContent = Field(default_factory=BlogContent)
    draft: bool = False
    id: str | None = None


class BlogIdResponse(BaseModel):
    id: str


class GetBlogRequest(BaseModel):
    blog_id: str
    draft: bool = False
    mode: str | None = None


class GetBlogResponse(BaseModel):
    blog: BlogDetail


class LikeRequest(BaseModel):
    blog_id: str


class LikeResponse(BaseModel):
    liked_by_user: bool
    total_likes: int


class IsLikedResponse(BaseModel):
    result: bool
