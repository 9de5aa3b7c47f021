"""FastAPI routes for in-app notifications.

Notifications are never deleted, so there is no DELETE route.
"""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.auth import Caller, current_caller, require_admin
from storefront.api.schemas import IdResponse
from storefront.notifications.api.schemas import MarkReadRequest, MarkReadResponse, SystemNotificationRequest
from storefront.notifications.management import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    PostSystemNotification,
)
from storefront.notifications.queries import DEFAULT_LIMIT, list_notifications

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def notifications(
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    caller: Caller = Depends(current_caller),
) -> dict:
    return list_notifications(caller.user_id, limit)


@router.post("", status_code=201, response_model=IdResponse)
async def post_system_notification(
    body: SystemNotificationRequest, caller: Caller = Depends(require_admin)
) -> IdResponse:
    command = PostSystemNotification(
        user_id=body.user_id,
        title=body.title,
        message=body.message,
        related_id=body.related_id,
        related_model=body.related_model,
    )
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@router.put("", response_model=MarkReadResponse)
async def mark_read(body: MarkReadRequest, caller: Caller = Depends(current_caller)) -> MarkReadResponse:
    if body.mark_all:
        updated = current_domain.process(MarkAllNotificationsRead(user_id=caller.user_id), asynchronous=False)
        return MarkReadResponse(updated=updated)

    if not body.notification_id:
        raise ValidationError({"notification_id": ["Provide a notification id or set mark_all"]})

    current_domain.process(
        MarkNotificationRead(notification_id=body.notification_id, user_id=caller.user_id),
        asynchronous=False,
    )
    return MarkReadResponse(updated=1)
