"""Catalogue load test scenarios.

An admin journey that builds out taxonomy and products, and a read-heavy
browsing user that exercises the listing filters.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    LETTER_SIZES,
    admin_headers,
    category_data,
    collection_data,
    product_data,
    subcategory_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CatalogueState


class CatalogueBuilderJourney(SequentialTaskSet):
    """Create Category -> SubCategory -> Collection -> Products -> Update price.

    Models a merchandiser stocking a new department.
    """

    def on_start(self):
        self.state = CatalogueState()
        self.headers = admin_headers()

    def _create(self, path, payload, label):
        with self.client.post(
            path, json=payload, headers=self.headers, catch_response=True, name=f"POST {path}"
        ) as resp:
            if resp.status_code == 201:
                return resp.json()["id"]
            resp.failure(f"Create {label} failed: {resp.status_code} - {extract_error_detail(resp)}")
            self.interrupt()

    @task
    def create_category(self):
        self.state.category_id = self._create("/categories", category_data(), "category")

    @task
    def create_subcategory(self):
        self.state.subcategory_id = self._create(
            "/subcategories", subcategory_data(self.state.category_id), "subcategory"
        )

    @task
    def create_collection(self):
        self.state.collection_id = self._create("/collections", collection_data(), "collection")

    @task
    def create_products(self):
        for _ in range(3):
            payload = product_data(self.state.category_id, self.state.subcategory_id, self.state.collection_id)
            self.state.product_ids.append(self._create("/products", payload, "product"))

    @task
    def reprice_product(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/products/{product_id}",
            json={"price": round(random.uniform(10.0, 200.0), 2)},
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class BrowseJourney(SequentialTaskSet):
    """Categories -> filtered listing -> product detail -> rating summary."""

    def on_start(self):
        self.products = []

    @task
    def list_categories(self):
        self.client.get("/categories", name="GET /categories")

    @task
    def filtered_listing(self):
        params = random.choice(
            [
                {"sort": "price-low"},
                {"sort": "newest", "featured": "true"},
                {"sizes": ",".join(random.sample(LETTER_SIZES, k=2))},
                {"min_price": 20, "max_price": 120, "sort": "name"},
            ]
        )
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.products = resp.json()
            else:
                resp.failure(f"Listing failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def product_detail(self):
        if not self.products:
            self.interrupt()
        product = random.choice(self.products)
        self.client.get(f"/products/{product['id']}", name="GET /products/{id}")
        self.client.get(f"/reviews/rating/{product['id']}", name="GET /reviews/rating/{id}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    wait_time = between(0.5, 2.0)
    tasks = {BrowseJourney: 8, CatalogueBuilderJourney: 1}
