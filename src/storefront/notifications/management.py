"""Notification management — writing rows and flipping read flags."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.notifications.notification import Notification, NotificationType, RelatedModel

logger = structlog.get_logger(__name__)


def notify(user_id, notification_type, title, message, related_id=None, related_model=None):
    """Insert one notification row for ``user_id``; returns its id."""
    notification = Notification.create(
        user_id=user_id,
        notification_type=notification_type,
        title=title,
        message=message,
        related_id=related_id,
        related_model=related_model,
    )
    current_domain.repository_for(Notification).add(notification)
    logger.info(
        "notification_created",
        notification_id=str(notification.id),
        user_id=str(user_id),
        notification_type=notification_type,
    )
    return str(notification.id)


@storefront.command(part_of="Notification")
class PostSystemNotification:
    user_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    message: String(required=True, max_length=1000)
    related_id: Identifier()
    related_model: String(choices=RelatedModel)


@storefront.command(part_of="Notification")
class MarkNotificationRead:
    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)


@storefront.command(part_of="Notification")
class MarkAllNotificationsRead:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=Notification)
class ManageNotificationsHandler:
    @handle(PostSystemNotification)
    def post_system_notification(self, command):
        return notify(
            user_id=command.user_id,
            notification_type=NotificationType.SYSTEM.value,
            title=command.title,
            message=command.message,
            related_id=command.related_id,
            related_model=command.related_model,
        )

    @handle(MarkNotificationRead)
    def mark_read(self, command):
        repo = current_domain.repository_for(Notification)
        try:
            notification = repo.get(command.notification_id)
        except ObjectNotFoundError:
            raise NotFound("Notification not found") from None

        # Another user's notification is reported the same as a missing one
        if str(notification.user_id) != str(command.user_id):
            raise NotFound("Notification not found")

        notification.mark_read()
        repo.add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo.unread_for(command.user_id)
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)
