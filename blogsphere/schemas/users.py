from __future__ import annotations

from pydantic import BaseModel

from .blogs import AuthorSummary


class UserSearchRequest(BaseModel):
    query: str = ""


class UserSearchResponse(BaseModel):
    users: list[AuthorSummary]


class ProfileRequest(BaseModel):
    username: str


class AccountInfo(BaseModel):
    total_posts: int
    total_reads: int


class ProfilePublic(BaseModel):
    id: str
    fullname: str
    email: str
    username: str
    profile_img: str
    bio: str
    account_info: AccountInfo
    joinedAt: str
