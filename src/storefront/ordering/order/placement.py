"""Order placement — turns the shopper's cart snapshot into a pending order."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text()  # JSON array of cart lines
    total = Float(default=0.0, min_value=0.0)
    full_name = String(max_length=200)
    phone_number = String(max_length=30)
    address = String(max_length=1000)
    notes = String(max_length=1000)
    payment_method = String(max_length=50)


def _decode_items(raw):
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be a JSON array"]}) from None
    if not isinstance(items, list):
        raise ValidationError({"items": ["Items must be a JSON array"]})
    return items


def _normalize_item(raw):
    """Accept either flat color fields or a nested ``color`` object."""
    if not isinstance(raw, dict):
        raise ValidationError({"items": ["Each item must be an object"]})
    color = raw.get("color")
    if not isinstance(color, dict):
        color = {}
    product_id = raw.get("product_id") or raw.get("product")
    if not product_id:
        raise ValidationError({"items": ["Each item needs a product"]})
    return {
        "product_id": product_id,
        "size": raw.get("size"),
        "color_name": raw.get("color_name") or color.get("name"),
        "color_hex": raw.get("color_hex") or color.get("hex"),
        "quantity": raw.get("quantity"),
        "price": raw.get("price"),
    }


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = [_normalize_item(i) for i in _decode_items(command.items)]

        order = Order.place(
            user_id=command.user_id,
            items=items,
            total=command.total,
            customer_info={
                "full_name": command.full_name,
                "phone_number": command.phone_number,
                "address": command.address,
                "notes": command.notes,
            },
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)

        # Emptied in the same unit of work as the order insert
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is not None and cart.items:
            cart.clear()
            cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total=order.total,
        )
        return str(order.id)
