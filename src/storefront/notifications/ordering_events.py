"""Notification fan-out — reacts to Order events.

OrderPlaced notifies every configured admin and the customer;
OrderStatusChanged notifies the customer.
"""

import os

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notifications.management import notify
from storefront.notifications.notification import Notification, RelatedModel
from storefront.notifications.templates import get_template
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged

logger = structlog.get_logger(__name__)


def admin_ids() -> list[str]:
    """Admin user ids from ``STOREFRONT_ADMIN_IDS`` (comma-separated)."""
    raw = os.getenv("STOREFRONT_ADMIN_IDS", "")
    return [part.strip() for part in raw.split(",") if part.strip()]


def _send(user_id, template_name, context, order_id):
    template_cls = get_template(template_name)
    rendered = template_cls.render(context)
    return notify(
        user_id=user_id,
        notification_type=template_cls.notification_type,
        title=rendered["title"],
        message=rendered["message"],
        related_id=order_id,
        related_model=RelatedModel.ORDER.value,
    )


@storefront.event_handler(part_of=Notification, stream_category="storefront::order")
class OrderingEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        context = {
            "order_number": event.order_number,
            "customer_name": event.customer_name,
            "total": event.total or 0.0,
        }
        admins = admin_ids()
        if not admins:
            logger.warning("no_admins_configured", order_id=str(event.order_id))

        for admin_id in admins:
            _send(admin_id, "new_order", context, str(event.order_id))
        _send(str(event.user_id), "order_received", context, str(event.order_id))

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        _send(
            str(event.user_id),
            "order_status",
            {"order_number": event.order_number, "status": event.new_status},
            str(event.order_id),
        )
