"""Order aggregate (CQRS) — the record of a completed checkout.

Items and total are copied from the submitted cart as they are; nothing is
repriced. After placement only the status changes, and any status may follow
any other.
"""

import random
import time
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"


def generate_order_number():
    return f"ORD-{int(time.time() * 1000)}-{random.randint(0, 999)}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class CustomerInfo:
    """Contact details captured at checkout; the address is free text."""

    full_name = String(required=True, max_length=200)
    phone_number = String(required=True, max_length=30)
    address = String(required=True, max_length=1000)
    notes = String(max_length=1000)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    size = String(max_length=10)
    color_name = String(max_length=100)
    color_hex = String(max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    order_number = String(required=True, max_length=50)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    customer_info = ValueObject(CustomerInfo)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH_ON_DELIVERY.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, items, total, customer_info, payment_method=None):
        """Create a pending order from a cart snapshot.

        Args:
            items: list of dicts with product_id, size, color_name, color_hex,
                quantity and price.
            customer_info: dict with full_name, phone_number, address and
                optionally notes.
        """
        if not items:
            raise ValidationError({"items": ["Cart is empty"]})

        customer_info = customer_info or {}
        missing = [f for f in ("full_name", "phone_number", "address") if not customer_info.get(f)]
        if missing:
            raise ValidationError({f: ["is required"] for f in missing})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            order_number=generate_order_number(),
            items=[
                OrderItem(
                    product_id=item["product_id"],
                    size=item.get("size"),
                    color_name=item.get("color_name"),
                    color_hex=item.get("color_hex"),
                    quantity=item["quantity"],
                    price=item["price"],
                )
                for item in items
            ],
            total=float(total),
            customer_info=CustomerInfo(
                full_name=customer_info["full_name"],
                phone_number=customer_info["phone_number"],
                address=customer_info["address"],
                notes=customer_info.get("notes"),
            ),
            payment_method=payment_method or PaymentMethod.CASH_ON_DELIVERY.value,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                order_number=order.order_number,
                total=order.total,
                item_count=sum(i.quantity for i in order.items),
                customer_name=order.customer_info.full_name,
                placed_at=now,
            )
        )
        return order

    def contains_product(self, product_id):
        return any(str(item.product_id) == str(product_id) for item in self.items)

    def update_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Invalid status: {new_status}"]}) from None

        previous_status = self.status
        self.status = target.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                order_number=self.order_number,
                previous_status=previous_status,
                new_status=target.value,
                changed_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def newest_first(self, user_id=None):
        query = self._dao.query
        if user_id is not None:
            query = query.filter(user_id=str(user_id))
        # `limit(None)` must come last: every clone resets a None limit to the default
        return query.order_by("-created_at").limit(None).all().items

    def delivered_for(self, user_id):
        return self._dao.query.filter(user_id=str(user_id), status=OrderStatus.DELIVERED.value).limit(None).all().items
