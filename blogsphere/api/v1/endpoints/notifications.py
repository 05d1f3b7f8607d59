from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ....core.runtime import get_redis
from ....core.security import require_user_id
from ....schemas.blogs import CountResponse
from ....schemas.notifications import (
    NewNotificationResponse,
    NotificationList,
    NotificationsCountRequest,
    NotificationsRequest,
)
from ....services import notifications


router = APIRouter()


@router.post("/notifications", response_model=NotificationList)
async def list_notifications(
    payload: NotificationsRequest,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> NotificationList:
    items = await notifications.feed(redis, user_id, payload.page, payload.filter)
    return NotificationList(notifications=items)


@router.post("/all-notifications-count", response_model=CountResponse)
async def all_notifications_count(
    payload: NotificationsCountRequest,
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> CountResponse:
    return CountResponse(totalDocs=await notifications.count(redis, user_id, payload.filter))


@router.get("/new-notification", response_model=NewNotificationResponse)
async def new_notification(
    user_id: str = Depends(require_user_id),
    redis: Any = Depends(get_redis),
) -> NewNotificationResponse:
    return NewNotificationResponse(new_notification_available=await notifications.has_unseen(redis, user_id))
