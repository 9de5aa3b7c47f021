"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.errors import register_error_handlers
from storefront.ordering.api import cart_router
from storefront.ordering.cart.cart import Cart

SHOPPER = {"X-User-Id": "user-001"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    return TestClient(app)


def _add(client, product_id, quantity=1, size="M"):
    return client.post(
        "/cart",
        json={
            "product_id": product_id,
            "size": size,
            "color": {"name": "Sand", "hex": "#d8c8a8"},
            "quantity": quantity,
        },
        headers=SHOPPER,
    )


class TestViewCart:
    def test_empty_cart(self, client):
        response = client.get("/cart", headers=SHOPPER)
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0, "item_count": 0}

    def test_requires_caller(self, client):
        assert client.get("/cart").status_code == 401


class TestAddToCart:
    def test_add_returns_contents(self, client, product):
        response = _add(client, product.id, quantity=2)
        assert response.status_code == 200
        body = response.json()
        assert body["item_count"] == 2
        assert body["total"] == 100.0
        assert body["items"][0]["product"]["id"] == str(product.id)

    def test_stock_exceeded(self, client, product):
        _add(client, product.id, quantity=2)
        response = _add(client, product.id, quantity=2)

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Only 3 items available in stock for size M. You already have 2 in your cart."
        )
        cart = current_domain.repository_for(Cart).for_user("user-001")
        assert cart.items[0].quantity == 2

    def test_size_not_offered(self, client, product):
        assert _add(client, product.id, size="XL").status_code == 400

    def test_unknown_product(self, client):
        assert _add(client, "missing").status_code == 404

    def test_zero_quantity_rejected(self, client, product):
        assert _add(client, product.id, quantity=0).status_code == 422


class TestChangeCart:
    def test_update_quantity(self, client, product):
        item_id = _add(client, product.id).json()["items"][0]["id"]
        response = client.put("/cart", json={"item_id": item_id, "quantity": 3}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["item_count"] == 3

    def test_update_to_zero_removes(self, client, product):
        item_id = _add(client, product.id).json()["items"][0]["id"]
        response = client.put("/cart", json={"item_id": item_id, "quantity": 0}, headers=SHOPPER)
        assert response.json()["items"] == []

    def test_update_without_cart(self, client):
        response = client.put("/cart", json={"item_id": "missing", "quantity": 1}, headers=SHOPPER)
        assert response.status_code == 404

    def test_remove_line(self, client, product):
        item_id = _add(client, product.id).json()["items"][0]["id"]
        response = client.delete("/cart", params={"item_id": item_id}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_clear(self, client, make_product):
        _add(client, make_product(name="Shirt").id)
        _add(client, make_product(name="Scarf").id)

        response = client.delete("/cart", headers=SHOPPER)
        assert response.json()["item_count"] == 0
