"""Configurable fake payment gateway for development and testing.

Simulates hosted checkout without any external calls. Sessions are kept in
memory, every call is recorded, and webhooks are accepted when signed with
``test-signature``.
"""

import json
from uuid import uuid4

from storefront.payments.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    PaymentGateway,
    WebhookSignatureError,
)

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Checkout unavailable"
        self.sessions: dict[str, CheckoutSession] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Checkout unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": line_items,
                "currency": currency,
                "customer_email": customer_email,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": metadata,
            }
        )

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        session_id = f"cs_test_{uuid4().hex[:24]}"
        session = CheckoutSession(
            id=session_id,
            url=f"https://checkout.test/pay/{session_id}",
            metadata=dict(metadata),
            payment_status="unpaid",
        )
        self.sessions[session_id] = session
        return session

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        self.calls.append({"method": "retrieve_checkout_session", "session_id": session_id})

        session = self.sessions.get(session_id)
        if session is None:
            raise GatewayError(f"No such checkout session: {session_id}")
        return session

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        if signature != TEST_SIGNATURE:
            raise WebhookSignatureError("Invalid webhook signature")

        try:
            body = json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError(f"Invalid payload: {exc}")

        return GatewayEvent.from_payload(body)
