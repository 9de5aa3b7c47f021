"""Tests for Order placement and status changes."""

import re

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.ordering.order.order import Order, OrderStatus, PaymentMethod, generate_order_number

CUSTOMER = {"full_name": "Ada Shopper", "phone_number": "555-0100", "address": "1 Market St"}
ITEMS = [
    {"product_id": "prod-001", "size": "M", "color_name": "Sand", "color_hex": "#d8c8a8", "quantity": 2, "price": 50.0},
    {"product_id": "prod-002", "size": "32", "quantity": 1, "price": 80.0},
]


def _place(items=ITEMS, total=180.0, customer=CUSTOMER, **kwargs):
    return Order.place(user_id="user-001", items=items, total=total, customer_info=customer, **kwargs)


class TestPlacement:
    def test_starts_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_method == PaymentMethod.CASH_ON_DELIVERY.value

    def test_copies_items_and_total(self):
        order = _place()
        assert len(order.items) == 2
        assert order.items[0].color_name == "Sand"
        assert order.total == 180.0

    def test_total_is_taken_as_submitted(self):
        order = _place(total=1.0)
        assert order.total == 1.0

    def test_customer_info(self):
        order = _place(customer=dict(CUSTOMER, notes="Ring twice"))
        assert order.customer_info.full_name == "Ada Shopper"
        assert order.customer_info.notes == "Ring twice"

    def test_empty_cart(self):
        with pytest.raises(ValidationError) as exc:
            _place(items=[])
        assert exc.value.messages == {"items": ["Cart is empty"]}

    def test_missing_customer_fields(self):
        with pytest.raises(ValidationError) as exc:
            _place(customer={"full_name": "Ada Shopper"})
        assert set(exc.value.messages) == {"phone_number", "address"}

    def test_raises_order_placed(self):
        order = _place()
        event = next(e for e in order._events if isinstance(e, OrderPlaced))
        assert event.order_number == order.order_number
        assert event.item_count == 3
        assert event.customer_name == "Ada Shopper"

    def test_contains_product(self):
        order = _place()
        assert order.contains_product("prod-002")
        assert not order.contains_product("prod-999")


class TestOrderNumber:
    def test_format(self):
        assert re.fullmatch(r"ORD-\d+-\d{1,3}", generate_order_number())


class TestStatusChanges:
    def test_any_status_may_follow_any_other(self):
        order = _place()
        order.update_status("delivered")
        order.update_status("pending")
        assert order.status == "pending"

    def test_invalid_status(self):
        order = _place()
        with pytest.raises(ValidationError):
            order.update_status("lost")
        assert order.status == "pending"

    def test_raises_status_changed(self):
        order = _place()
        order.update_status("shipped")
        event = next(e for e in order._events if isinstance(e, OrderStatusChanged))
        assert event.previous_status == "pending"
        assert event.new_status == "shipped"
