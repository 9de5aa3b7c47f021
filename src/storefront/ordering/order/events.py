"""Domain events for the Order aggregate.

Both events are consumed by the notification fan-out.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A shopper checked out; the order starts as pending."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    order_number: String(required=True)
    total: Float(required=True)
    item_count: Integer(required=True)
    customer_name: String()
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    order_number: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)
