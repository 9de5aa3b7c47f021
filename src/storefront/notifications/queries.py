"""Notification read side."""

from protean.utils.globals import current_domain

from storefront.notifications.notification import Notification

DEFAULT_LIMIT = 10


def serialize_notification(notification):
    return {
        "id": str(notification.id),
        "type": notification.notification_type,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "related_id": str(notification.related_id) if notification.related_id else None,
        "related_model": notification.related_model,
        "created_at": notification.created_at.isoformat() if notification.created_at else None,
    }


def list_notifications(user_id, limit=DEFAULT_LIMIT):
    """Newest ``limit`` notifications and the user's total unread count."""
    repo = current_domain.repository_for(Notification)
    return {
        "notifications": [serialize_notification(n) for n in repo.for_user(user_id)[:limit]],
        "unread_count": len(repo.unread_for(user_id)),
    }
