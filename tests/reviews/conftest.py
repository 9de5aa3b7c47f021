import pytest
from protean import current_domain
from storefront.ordering.order.order import Order


@pytest.fixture()
def make_order():
    """Factory persisting an order for the given products, delivered by default."""

    def _make(products, user_id="user-001", status="delivered"):
        order = Order.place(
            user_id=user_id,
            items=[
                {"product_id": p.id, "size": "M", "color_name": "Sand", "quantity": 1, "price": p.price}
                for p in products
            ],
            total=sum(p.price for p in products),
            customer_info={"full_name": "Ada Shopper", "phone_number": "555-0100", "address": "1 Market St"},
        )
        if status != "pending":
            order.update_status(status)
        current_domain.repository_for(Order).add(order)
        return order

    return _make


@pytest.fixture()
def delivered_order(make_order, product):
    return make_order([product])
