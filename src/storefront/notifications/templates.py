"""Notification templates — title and message rendered from event context."""

from storefront.notifications.notification import NotificationType


class NewOrderTemplate:
    """Sent to every admin when a shopper places an order."""

    notification_type = NotificationType.NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        customer = context.get("customer_name") or "A customer"
        total = context.get("total", 0)
        return {
            "title": "New Order Received",
            "message": f"{customer} placed order {order_number} totalling {total:.2f}",
        }


class OrderReceivedTemplate:
    notification_type = NotificationType.ORDER_STATUS.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "title": "Order Received",
            "message": (
                f"Your order {order_number} has been received and is pending review. "
                "We'll let you know when its status changes."
            ),
        }


class OrderStatusTemplate:
    notification_type = NotificationType.ORDER_STATUS.value

    _MESSAGES = {
        "pending": "is pending review",
        "accepted": "has been accepted",
        "rejected": "has been rejected",
        "shipped": "has been shipped",
        "delivered": "has been delivered. You can now review its products",
    }

    @classmethod
    def render(cls, context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        status = context.get("status", "")
        detail = cls._MESSAGES.get(status, f"is now {status}")
        return {
            "title": "Order Status Updated",
            "message": f"Your order {order_number} {detail}.",
        }


TEMPLATE_REGISTRY: dict[str, type] = {
    "new_order": NewOrderTemplate,
    "order_received": OrderReceivedTemplate,
    "order_status": OrderStatusTemplate,
}


def get_template(name: str):
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No notification template registered under: {name}")
    return template_cls
