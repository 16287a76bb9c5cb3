"""Back-office load test scenarios.

Administrators sign in with the account created by
``python src/manage.py create-admin``; set LOADTEST_ADMIN_EMAIL and
LOADTEST_ADMIN_PASSWORD to match.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_name, product_data, restock_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState

ADMIN_EMAIL = os.environ.get("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.environ.get("LOADTEST_ADMIN_PASSWORD", "change-me-now")


class _AdminJourney(SequentialTaskSet):
    def on_start(self):
        self.state = AdminState()

    @task
    def login(self):
        with self.client.post(
            "/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            catch_response=True,
            name="POST /auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin login failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()


class CatalogueManagementJourney(_AdminJourney):
    """Login -> Create Category -> Create Products (x3) -> Restock."""

    @task
    def create_category(self):
        with self.client.post(
            "/categories",
            json={"name": category_name()},
            headers=self.state.headers,
            catch_response=True,
            name="POST /categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = resp.json()["category_id"]
            else:
                resp.failure(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_products(self):
        for _ in range(3):
            with self.client.post(
                "/products",
                json=product_data(self.state.category_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def restock(self):
        for product_id in self.state.product_ids:
            self.client.put(
                f"/products/{product_id}",
                json=restock_data(),
                headers=self.state.headers,
                name="PUT /products/{id}",
            )

    @task
    def done(self):
        self.interrupt()


class OrderFulfilmentJourney(_AdminJourney):
    """Login -> Dashboard -> List Orders -> Ship One -> Export Its Log."""

    @task
    def dashboard(self):
        self.client.get(
            "/admin/dashboard",
            params={"days": 30, "timezone": "Europe/Lisbon"},
            headers=self.state.headers,
            name="GET /admin/dashboard",
        )

    @task
    def list_orders(self):
        with self.client.get(
            "/admin/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /admin/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()
            processing = [order["id"] for order in resp.json() if order["status"] == "PROCESSING"]
            if not processing:
                self.interrupt()
            self.state.order_ids = random.sample(processing, 1)

    @task
    def ship(self):
        self.client.put(
            f"/admin/orders/{self.state.order_ids[0]}/status",
            json={"status": "SHIPPED"},
            headers=self.state.headers,
            name="PUT /admin/orders/{id}/status",
        )

    @task
    def export_log(self):
        self.client.get(
            f"/admin/orders/{self.state.order_ids[0]}/log",
            headers=self.state.headers,
            name="GET /admin/orders/{id}/log",
        )

    @task
    def done(self):
        self.interrupt()


class AdminUser(HttpUser):
    wait_time = between(2, 5)
    tasks = {CatalogueManagementJourney: 1, OrderFulfilmentJourney: 2}
