"""Storefront shopper load test scenarios.

Two stateful SequentialTaskSet journeys: a signed-in shopper who buys
straight from the cart, and an anonymous visitor who only browses. Steps
execute in order, and each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, registration_data, shipping_info
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


def pick_products(client, count: int = 2) -> list[str]:
    """Return up to ``count`` random in-stock product ids from the first catalogue page."""
    with client.get(
        "/products",
        params={"limit": 50},
        catch_response=True,
        name="GET /products",
    ) as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")
            return []
        in_stock = [product["id"] for product in resp.json()["items"] if product["quantity"] > 3]
    return random.sample(in_stock, min(count, len(in_stock)))


class ShopperPurchaseJourney(SequentialTaskSet):
    """Register -> Browse -> Favorite -> Add to Cart (x2) -> Place Order -> Order History."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/auth/register",
            json=payload,
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
                self.state.email = payload["email"]
            else:
                resp.failure(f"Registration failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        self.state.product_ids = pick_products(self.client)
        if not self.state.product_ids:
            self.interrupt()

    @task
    def view_product(self):
        product_id = self.state.product_ids[0]
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task
    def favorite(self):
        with self.client.post(
            f"/favorites/{self.state.product_ids[0]}/toggle",
            headers=self.state.headers,
            catch_response=True,
            name="POST /favorites/{id}/toggle",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Favorite failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def add_to_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json=cart_item_data(product_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_count = resp.json()["item_count"]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} {extract_error_detail(resp)}")
        if not self.state.cart_count:
            self.interrupt()

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.state.headers, name="GET /cart")

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=shipping_info(email=self.state.email),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def order_history(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")
        self.client.get(f"/orders/{self.state.order_id}", headers=self.state.headers, name="GET /orders/{id}")

    @task
    def done(self):
        self.interrupt()


class BrowsingJourney(SequentialTaskSet):
    """Anonymous visitor: categories -> filtered listing -> product page -> activity ping."""

    def on_start(self):
        self.category_ids = []

    @task
    def categories(self):
        with self.client.get("/categories", catch_response=True, name="GET /categories") as resp:
            if resp.status_code == 200:
                self.category_ids = [category["id"] for category in resp.json()]
            else:
                resp.failure(f"List categories failed: {resp.status_code}")
                self.interrupt()

    @task
    def filtered_listing(self):
        params = {
            "page": random.randint(1, 3),
            "limit": 12,
            "min_price": 10,
            "max_price": 100,
            "sort_field": random.choice(["price", "name", "created_at"]),
            "sort_order": random.choice(["asc", "desc"]),
        }
        if self.category_ids:
            params["category_id"] = random.choice(self.category_ids)
        self.client.get("/products", params=params, name="GET /products?filters")

    @task
    def product_page(self):
        product_ids = pick_products(self.client, count=1)
        if product_ids:
            self.client.get(f"/products/{product_ids[0]}", name="GET /products/{id}")

    @task
    def track_visit(self):
        self.client.post(
            "/activity",
            json={"action": "PAGE_VIEW", "description": "Browsed the catalogue", "path": "/products"},
            name="POST /activity",
        )

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Storefront traffic only: mostly browsing, some purchases."""

    wait_time = between(1, 3)
    tasks = {BrowsingJourney: 3, ShopperPurchaseJourney: 1}
