"""Hosted checkout load test scenarios.

Drives the provider checkout path end to end against the fake gateway:
the session is opened by the storefront and the provider's webhook is
simulated with the fake gateway's test signature. Needs a server running
without STRIPE_SECRET_KEY.
"""

import json

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import shipping_info, webhook_event
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState
from loadtests.scenarios.shopper import pick_products

WEBHOOK_HEADERS = {"stripe-signature": "test-signature", "Content-Type": "application/json"}


class _CheckoutJourney(SequentialTaskSet):
    def on_start(self):
        self.state = CheckoutState()

    def _post_webhook(self, event_type: str):
        body = webhook_event(event_type, self.state.order_id, self.state.session_id)
        with self.client.post(
            "/checkout/webhook",
            data=json.dumps(body),
            headers=WEBHOOK_HEADERS,
            catch_response=True,
            name=f"POST /checkout/webhook [{event_type}]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Webhook failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def browse(self):
        self.state.product_ids = pick_products(self.client)
        if not self.state.product_ids:
            self.interrupt()

    @task
    def open_session(self):
        payload = {
            "items": [{"product_id": product_id, "quantity": 1} for product_id in self.state.product_ids],
            "shipping_info": shipping_info(),
        }
        with self.client.post(
            "/checkout/sessions",
            json=payload,
            catch_response=True,
            name="POST /checkout/sessions",
        ) as resp:
            if resp.status_code == 201:
                data = resp.json()
                self.state.order_id = data["order_id"]
                self.state.session_id = data["session_id"]
            else:
                resp.failure(f"Checkout session failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()


class PaidCheckoutJourney(_CheckoutJourney):
    """Browse -> Open Session -> Webhook (completed) -> Success Page."""

    @task
    def provider_completes(self):
        self._post_webhook("checkout.session.completed")

    @task
    def success_page(self):
        with self.client.get(
            "/checkout/verify-session",
            params={"session_id": self.state.session_id},
            catch_response=True,
            name="GET /checkout/verify-session",
        ) as resp:
            if resp.status_code != 200 or resp.json()["payment_status"] != "PAID":
                resp.failure(f"Order not paid after webhook: {resp.status_code} {resp.text[:200]}")

    @task
    def done(self):
        self.interrupt()


class AbandonedCheckoutJourney(_CheckoutJourney):
    """Browse -> Open Session -> Webhook (expired)."""

    @task
    def provider_expires(self):
        self._post_webhook("checkout.session.expired")

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    wait_time = between(1, 3)
    tasks = {PaidCheckoutJourney: 3, AbandonedCheckoutJourney: 1}
