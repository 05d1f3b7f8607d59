from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .blogs import AuthorSummary


NotificationFilter = Literal["all", "like", "comment", "reply"]


class NotificationsRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    filter: NotificationFilter = "all"


class NotificationsCountRequest(BaseModel):
    filter: NotificationFilter = "all"


class NotificationPublic(BaseModel):
    id: str
    type: str
    blog_id: str
    blog_title: str
    user: AuthorSummary
    comment: str | None = None
    seen: bool
    createdAt: str


class NotificationList(BaseModel):
    notifications: list[NotificationPublic]


class NewNotificationResponse(BaseModel):
    new_notification_available: bool
