"""Integration tests for Review API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api.errors import register_error_handlers
from storefront.reviews.api import router

SHOPPER = {"X-User-Id": "user-001"}
OTHER_SHOPPER = {"X-User-Id": "user-002"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router)
    return TestClient(app)


def _submit(client, product, order, rating=5, headers=SHOPPER):
    return client.post(
        "/reviews",
        json={"product_id": str(product.id), "order_id": str(order.id), "rating": rating, "comment": "Lovely"},
        headers=headers,
    )


class TestSubmitEndpoint:
    def test_submit(self, client, product, delivered_order):
        response = _submit(client, product, delivered_order)
        assert response.status_code == 201

        listed = client.get("/reviews", params={"product_id": str(product.id)}).json()
        assert [r["id"] for r in listed] == [response.json()["id"]]

    def test_not_eligible(self, client, product, make_order):
        order = make_order([product], status="pending")
        response = _submit(client, product, order)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid order or order not delivered"}

    def test_duplicate(self, client, product, delivered_order):
        _submit(client, product, delivered_order)
        assert _submit(client, product, delivered_order).status_code == 400

    def test_rating_out_of_range(self, client, product, delivered_order):
        response = _submit(client, product, delivered_order, rating=6)
        assert response.status_code == 400
        assert "rating" in response.json()["error"]
        assert client.get("/reviews", params={"product_id": str(product.id)}).json() == []

    def test_requires_caller(self, client, product, delivered_order):
        assert _submit(client, product, delivered_order, headers={}).status_code == 401


class TestReadEndpoints:
    def test_mine_and_eligible(self, client, make_product, make_order):
        shirt = make_product(name="Shirt")
        scarf = make_product(name="Scarf")
        order = make_order([shirt, scarf])
        _submit(client, shirt, order)

        mine = client.get("/reviews/mine", headers=SHOPPER).json()
        assert [r["product"]["name"] for r in mine] == ["Shirt"]

        eligible = client.get("/reviews/eligible-products", headers=SHOPPER).json()
        assert [e["product"]["name"] for e in eligible] == ["Scarf"]

    def test_rating_summary(self, client, product, delivered_order):
        _submit(client, product, delivered_order, rating=3)
        summary = client.get(f"/reviews/rating/{product.id}").json()
        assert summary["average_rating"] == 3.0
        assert summary["total_reviews"] == 1


class TestDeleteEndpoint:
    def test_author_deletes(self, client, product, delivered_order):
        review_id = _submit(client, product, delivered_order).json()["id"]
        assert client.delete(f"/reviews/{review_id}", headers=SHOPPER).status_code == 200
        assert client.get("/reviews", params={"product_id": str(product.id)}).json() == []

    def test_other_user_unauthorized(self, client, product, delivered_order):
        review_id = _submit(client, product, delivered_order).json()["id"]
        assert client.delete(f"/reviews/{review_id}", headers=OTHER_SHOPPER).status_code == 401

    def test_missing_review(self, client):
        assert client.delete("/reviews/missing", headers=SHOPPER).status_code == 404
