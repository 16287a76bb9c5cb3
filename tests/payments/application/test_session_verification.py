"""Application tests for looking up an order from its checkout session."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.payments.checkout.session import CreateCheckoutOrder, OpenCheckoutSession
from storefront.payments.checkout.verification import verify_session
from storefront.payments.checkout.webhook import SESSION_COMPLETED, process_gateway_event
from storefront.payments.gateway.port import CheckoutSession, GatewayError, GatewayEvent


def _open_session(product_id):
    order_id = current_domain.process(
        CreateCheckoutOrder(items=json.dumps([{"product_id": product_id, "quantity": 1}]), email="jane@example.com"),
        asynchronous=False,
    )
    return current_domain.process(OpenCheckoutSession(order_id=order_id), asynchronous=False)


class TestVerifySession:
    def test_pending_order(self, make_product):
        session = _open_session(make_product())

        result = verify_session(session["session_id"])

        assert result.order_number.startswith("ORD-")
        assert result.payment_status == "PENDING"
        assert result.status == "PENDING"

    def test_paid_order(self, make_product):
        session = _open_session(make_product())
        process_gateway_event(
            GatewayEvent(
                id="evt_1",
                type=SESSION_COMPLETED,
                data={"metadata": {"orderId": session["order_id"]}, "payment_intent": "pi_1"},
            )
        )

        result = verify_session(session["session_id"])

        assert result.payment_status == "PAID"
        assert result.status == "PROCESSING"

    def test_session_id_required(self):
        with pytest.raises(ValidationError) as exc:
            verify_session(None)
        assert exc.value.messages["session_id"] == ["Session ID required"]

    def test_unknown_session(self):
        with pytest.raises(GatewayError):
            verify_session("cs_test_missing")

    def test_session_without_order(self, fake_gateway):
        fake_gateway.sessions["cs_test_orphan"] = CheckoutSession(id="cs_test_orphan")

        with pytest.raises(ObjectNotFoundError):
            verify_session("cs_test_orphan")
