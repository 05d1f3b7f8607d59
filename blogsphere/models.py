"""
Documents kept in the store.

Each model is persisted as one redis hash. Scalars are stored as strings,
booleans as "1"/"0" and structured fields as JSON; ``None`` fields are left
out of the hash entirely.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field


class Document(BaseModel):
    json_fields: ClassVar[tuple[str, ...]] = ()

    def to_redis(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for name, value in self.model_dump().items():
            if value is None:
                continue
            if name in self.json_fields:
                out[name] = json.dumps(value)
            elif isinstance(value, bool):
                out[name] = "1" if value else "0"
            else:
                out[name] = str(value)
        return out

    @classmethod
    def from_redis(cls, data: dict[str, Any]):
        if not data:
            return None
        parsed = dict(data)
        for name in cls.json_fields:
            if isinstance(parsed.get(name), str):
                parsed[name] = json.loads(parsed[name])
        return cls.model_validate(parsed)


class User(Document):
    """
    Blog author / reader.
    Keys: "user:{id}", post list "user:{id}:blogs"
    """
    id: str
    fullname: str
    email: str
    username: str
    password: Optional[str] = Field(None, description="bcrypt hash; absent for federated accounts")
    google_auth: bool = False
    profile_img: str = ""
    bio: str = ""
    total_posts: int = 0
    total_reads: int = 0
    joined_at: str


class Post(Document):
    """
    Blog post.
    Keys: "blog:{blog_id}", comment list "blog:{blog_id}:comments"
    """
    json_fields: ClassVar[tuple[str, ...]] = ("content", "tags")

    blog_id: str
    title: str
    des: str = ""
    banner: str = ""
    content: dict[str, Any] = Field(default_factory=lambda: {"blocks": []})
    tags: list[str] = Field(default_factory=list)
    draft: bool = False
    author: str
    total_likes: int = 0
    total_comments: int = 0
    total_reads: int = 0
    total_parent_comments: int = 0
    published_at: str
    updated_at: str

    @property
    def blocks(self) -> list[Any]:
        return list(self.content.get("blocks") or [])


class Comment(Document):
    """
    Comment or reply on a post.
    Keys: "comment:{id}", replies "comment:{id}:children"
    """
    id: str
    blog_id: str
    blog_author: str
    comment: str
    commented_by: str
    parent: Optional[str] = None
    is_reply: bool = False
    commented_at: str


class Notification(Document):
    """
    Activity on a post, delivered to the post's author.
    Keys: "notification:{id}", feed "user:{id}:notifications"
    """
    id: str
    type: str
    blog: str
    notification_for: str
    user: str
    comment: Optional[str] = None
    seen: bool = False
    created_at: str
