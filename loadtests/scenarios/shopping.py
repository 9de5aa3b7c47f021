"""Shopper load test scenarios.

The checkout journey threads one shopper through the cart, order placement,
an admin delivering the order and the shopper reviewing what they bought.
Stock conflicts (400 on add) are expected under load and not failures.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import admin_headers, order_payload, review_data, shopper_headers, shopper_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState

STATUS_PATH = ["accepted", "shipped", "delivered"]


class CheckoutJourney(SequentialTaskSet):
    """Browse -> Add to cart -> Update quantity -> Place order -> Deliver -> Review -> Notifications."""

    def on_start(self):
        self.state = ShopperState(user_id=shopper_id())
        self.headers = shopper_headers(self.state.user_id)

    @task
    def pick_product(self):
        with self.client.get("/products", params={"sort": "newest"}, catch_response=True, name="GET /products") as resp:
            listed = resp.json() if resp.status_code == 200 else []
            in_stock = [p for p in listed if any(s["stock"] > 0 for s in p["sizes"])]
            if not in_stock:
                resp.success()
                self.interrupt()
            self.state.product = random.choice(in_stock)
            self.state.size = random.choice([s["size"] for s in self.state.product["sizes"] if s["stock"] > 0])

    @task
    def add_to_cart(self):
        color = self.state.product["colors"][0]
        with self.client.post(
            "/cart",
            json={
                "product_id": self.state.product["id"],
                "size": self.state.size,
                "color": {"name": color["name"], "hex": color["hex"]},
                "quantity": 1,
            },
            headers=self.headers,
            catch_response=True,
            name="POST /cart",
        ) as resp:
            if resp.status_code == 200:
                self.state.item_ids = [line["id"] for line in resp.json()["items"]]
            elif resp.status_code == 400:
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def bump_quantity(self):
        with self.client.put(
            "/cart",
            json={"item_id": self.state.item_ids[0], "quantity": 2},
            headers=self.headers,
            catch_response=True,
            name="PUT /cart",
        ) as resp:
            # Not enough stock for a second unit is a normal outcome
            if resp.status_code in (200, 400):
                resp.success()

    @task
    def place_order(self):
        cart = self.client.get("/cart", headers=self.headers, name="GET /cart").json()
        with self.client.post(
            "/orders",
            json=order_payload(cart),
            headers=self.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def deliver_order(self):
        for status in STATUS_PATH:
            with self.client.put(
                f"/orders/{self.state.order_id}",
                json={"status": status},
                headers=admin_headers(),
                catch_response=True,
                name="PUT /orders/{id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Status {status} failed: {resp.status_code} - {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def review_purchase(self):
        eligible = self.client.get(
            "/reviews/eligible-products", headers=self.headers, name="GET /reviews/eligible-products"
        ).json()
        for entry in eligible:
            with self.client.post(
                "/reviews",
                json=review_data(entry["product_id"], entry["order"]["id"]),
                headers=self.headers,
                catch_response=True,
                name="POST /reviews",
            ) as resp:
                if resp.status_code == 201:
                    self.state.reviewed = True
                else:
                    resp.failure(f"Review failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def read_notifications(self):
        self.client.get("/notifications", headers=self.headers, name="GET /notifications")
        self.client.put("/notifications", json={"mark_all": True}, headers=self.headers, name="PUT /notifications")

    @task
    def done(self):
        self.interrupt()


class CartChurnJourney(SequentialTaskSet):
    """Add -> Remove -> Add -> Clear. A shopper who never checks out."""

    def on_start(self):
        self.headers = shopper_headers(shopper_id())
        self.products = []

    @task
    def browse(self):
        self.products = [
            p for p in self.client.get("/products", name="GET /products").json() if p["sizes"] and p["colors"]
        ]
        if not self.products:
            self.interrupt()

    @task
    def add_then_remove(self):
        product = random.choice(self.products)
        resp = self.client.post(
            "/cart",
            json={"product_id": product["id"], "size": product["sizes"][0]["size"], "quantity": 1},
            headers=self.headers,
            name="POST /cart",
        )
        if resp.status_code == 200 and resp.json()["items"]:
            item_id = resp.json()["items"][0]["id"]
            self.client.delete("/cart", params={"item_id": item_id}, headers=self.headers, name="DELETE /cart?item_id")

    @task
    def clear(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")
        self.client.delete("/cart", headers=self.headers, name="DELETE /cart")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1.0, 3.0)
    tasks = {CheckoutJourney: 3, CartChurnJourney: 2}
