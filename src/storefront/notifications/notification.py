"""Notification aggregate (CQRS) — an in-app message addressed to one user.

Notifications are written in reaction to order events (or posted by an
admin) and are never deleted. After creation only the read flag changes.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront
from storefront.notifications.events import NotificationCreated, NotificationRead


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    NEW_ORDER = "new_order"
    ORDER_STATUS = "order_status"
    SYSTEM = "system"


class RelatedModel(Enum):
    ORDER = "Order"
    PRODUCT = "Product"
    REVIEW = "Review"
    USER = "User"


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Notification:
    user_id: Identifier(required=True)
    notification_type: String(choices=NotificationType, required=True)
    title: String(required=True, max_length=200)
    message: String(required=True, max_length=1000)
    is_read: Boolean(default=False)

    # Optional pointer at the thing the notification is about
    related_id: Identifier()
    related_model: String(choices=RelatedModel)

    created_at: DateTime()
    read_at: DateTime()

    @classmethod
    def create(cls, user_id, notification_type, title, message, related_id=None, related_model=None):
        now = datetime.now(UTC)
        notification = cls(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            is_read=False,
            related_id=related_id,
            related_model=related_model,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                notification_type=notification_type,
                created_at=now,
            )
        )
        return notification

    def mark_read(self):
        """Flip the read flag; already-read notifications are left alone."""
        if self.is_read:
            return
        now = datetime.now(UTC)
        self.is_read = True
        self.read_at = now
        self.raise_(NotificationRead(notification_id=str(self.id), user_id=str(self.user_id), read_at=now))


@storefront.repository(part_of=Notification)
class NotificationRepository:
    def for_user(self, user_id):
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items

    def unread_for(self, user_id):
        return self._dao.query.filter(user_id=str(user_id), is_read=False).limit(None).all().items
