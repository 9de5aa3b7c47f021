"""Integration tests for catalogue API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api.errors import register_error_handlers
from storefront.catalogue.api import (
    category_router,
    collection_router,
    likes_router,
    product_router,
    subcategory_router,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product

ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}
SHOPPER = {"X-User-Id": "user-001", "X-User-Role": "user"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    for router in (product_router, likes_router, category_router, subcategory_router, collection_router):
        app.include_router(router)
    return TestClient(app)


def _product_body(category_id, **overrides):
    body = {
        "name": "Linen Shirt",
        "description": "Breathable",
        "price": 49.0,
        "category_id": category_id,
        "sizes": [{"size": "M", "stock": 3}],
        "colors": [{"name": "Sand", "hex": "#d8c8a8", "images": ["https://img.example/1.jpg"]}],
    }
    body.update(overrides)
    return body


class TestProductEndpoints:
    def test_create_product(self, client, category):
        response = client.post("/products", json=_product_body(category.id), headers=ADMIN)
        assert response.status_code == 201

        product = current_domain.repository_for(Product).get(response.json()["id"])
        assert product.featured_image == "https://img.example/1.jpg"

    def test_create_requires_admin(self, client, category):
        response = client.post("/products", json=_product_body(category.id), headers=SHOPPER)
        assert response.status_code == 403

    def test_create_requires_caller(self, client, category):
        response = client.post("/products", json=_product_body(category.id))
        assert response.status_code == 401

    def test_color_without_image_rejected(self, client, category):
        body = _product_body(category.id, colors=[{"name": "Sand", "hex": "#d8c8a8", "images": []}])
        response = client.post("/products", json=body, headers=ADMIN)
        assert response.status_code == 400

    def test_list_and_filter(self, client, make_product):
        make_product(name="Linen Shirt", price=50.0)
        make_product(name="Wool Scarf", price=20.0)

        response = client.get("/products", params={"max_price": 30})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Wool Scarf"]

    def test_unknown_sort_rejected(self, client):
        assert client.get("/products", params={"sort": "random"}).status_code == 422

    def test_get_missing_product(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_update_product(self, client, product):
        response = client.put(f"/products/{product.id}", json={"price": 42.0}, headers=ADMIN)
        assert response.status_code == 200
        assert current_domain.repository_for(Product).get(product.id).price == 42.0

    def test_delete_hides_product(self, client, product):
        assert client.delete(f"/products/{product.id}", headers=ADMIN).status_code == 200
        assert client.get("/products").json() == []


class TestLikeEndpoints:
    def test_like_and_list(self, client, product):
        response = client.post(f"/products/{product.id}/like", json={"liked": True}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json() == {"likes": 1, "liked": True}

        liked = client.get("/likes", headers=SHOPPER).json()
        assert [p["id"] for p in liked] == [str(product.id)]

    def test_like_requires_caller(self, client, product):
        response = client.post(f"/products/{product.id}/like", json={"liked": True})
        assert response.status_code == 401


class TestTaxonomyEndpoints:
    def test_create_category_and_subcategory(self, client):
        category_id = client.post("/categories", json={"name": "Shirts"}, headers=ADMIN).json()["id"]
        response = client.post(
            "/subcategories",
            json={"name": "Oxford", "category_id": category_id},
            headers=ADMIN,
        )
        assert response.status_code == 201

        detail = client.get(f"/categories/{category_id}").json()
        assert [s["name"] for s in detail["subcategories"]] == ["Oxford"]

    def test_duplicate_category_name(self, client):
        client.post("/categories", json={"name": "Shirts"}, headers=ADMIN)
        response = client.post("/categories", json={"name": "shirts"}, headers=ADMIN)
        assert response.status_code == 400

    def test_delete_category_in_use(self, client, product, category):
        response = client.delete(f"/categories/{category.id}", headers=ADMIN)
        assert response.status_code == 400
        assert current_domain.repository_for(Category).get(category.id) is not None

    def test_collections_listing(self, client):
        client.post("/collections", json={"name": "Summer", "is_featured": True}, headers=ADMIN)
        client.post("/collections", json={"name": "Winter"}, headers=ADMIN)

        featured = client.get("/collections", params={"featured": True}).json()
        assert [c["name"] for c in featured] == ["Summer"]
