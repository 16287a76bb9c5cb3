"""Tests for gateway port/adapter integration."""

import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from storefront.payments.gateway import get_gateway, reset_gateway, set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    GatewayConfigurationError,
    GatewayError,
    GatewayEvent,
    WebhookSignatureError,
)
from storefront.payments.gateway.stripe_adapter import StripeGateway

LINE = CheckoutLineItem(name="Stoneware Mug", unit_amount=2400, quantity=2, description="Glazed by hand")


def _open(gateway, **overrides):
    kwargs = {
        "line_items": [LINE],
        "currency": "eur",
        "customer_email": "jane@example.com",
        "success_url": "https://shop.example.com/checkout/success?session_id={CHECKOUT_SESSION_ID}",
        "cancel_url": "https://shop.example.com/checkout/cancel?order_id=ord-1",
        "metadata": {"orderId": "ord-1", "orderNumber": "ORD-1"},
    }
    kwargs.update(overrides)
    return gateway.create_checkout_session(**kwargs)


def _sign(payload: str, secret: str) -> str:
    timestamp = int(time.time())
    digest = hmac.new(secret.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


class TestFakeGateway:
    def test_session_is_opened(self):
        gateway = FakeGateway()
        session = _open(gateway)

        assert isinstance(session, CheckoutSession)
        assert session.id.startswith("cs_test_")
        assert session.url == f"https://checkout.test/pay/{session.id}"
        assert session.metadata == {"orderId": "ord-1", "orderNumber": "ORD-1"}
        assert session.payment_status == "unpaid"

    def test_configured_session_fails(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Card network down")

        with pytest.raises(GatewayError, match="Card network down"):
            _open(gateway)

    def test_retrieve_known_session(self):
        gateway = FakeGateway()
        session = _open(gateway)

        assert gateway.retrieve_checkout_session(session.id) == session

    def test_retrieve_unknown_session(self):
        with pytest.raises(GatewayError):
            FakeGateway().retrieve_checkout_session("cs_test_missing")

    def test_webhook_signature_verification(self):
        gateway = FakeGateway()
        payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed", "data": {"object": {"id": "cs_1"}}})

        event = gateway.construct_event(payload.encode(), "test-signature")
        assert event == GatewayEvent(id="evt_1", type="checkout.session.completed", data={"id": "cs_1"})

        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(payload.encode(), "wrong-signature")

    def test_malformed_payload(self):
        with pytest.raises(WebhookSignatureError):
            FakeGateway().construct_event(b"not json", "test-signature")

    def test_payload_without_event_type(self):
        payload = json.dumps({"id": "evt_1", "data": {}})

        with pytest.raises(WebhookSignatureError, match="no event type"):
            FakeGateway().construct_event(payload.encode(), "test-signature")

    def test_call_logging(self):
        gateway = FakeGateway()
        session = _open(gateway)
        gateway.retrieve_checkout_session(session.id)

        assert [call["method"] for call in gateway.calls] == ["create_checkout_session", "retrieve_checkout_session"]
        assert gateway.calls[0]["line_items"] == [LINE]


class TestStripeGateway:
    def test_session_request(self, monkeypatch):
        captured = {}

        def fake_create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(
                id="cs_live_1",
                url="https://checkout.stripe.com/c/pay/cs_live_1",
                metadata=kwargs["metadata"],
                payment_status="unpaid",
            )

        monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)

        session = _open(StripeGateway("sk_test_123", "whsec_123"))

        assert session == CheckoutSession(
            id="cs_live_1",
            url="https://checkout.stripe.com/c/pay/cs_live_1",
            metadata={"orderId": "ord-1", "orderNumber": "ORD-1"},
            payment_status="unpaid",
        )
        assert captured["api_key"] == "sk_test_123"
        assert captured["mode"] == "payment"
        assert captured["payment_method_types"] == ["card"]
        assert captured["customer_email"] == "jane@example.com"
        assert captured["line_items"] == [
            {
                "price_data": {
                    "currency": "eur",
                    "product_data": {"name": "Stoneware Mug", "description": "Glazed by hand"},
                    "unit_amount": 2400,
                },
                "quantity": 2,
            }
        ]
        [shipping] = captured["shipping_options"]
        assert shipping["shipping_rate_data"]["fixed_amount"] == {"amount": 0, "currency": "eur"}
        assert shipping["shipping_rate_data"]["delivery_estimate"]["maximum"] == {"unit": "business_day", "value": 5}

    def test_line_without_description(self, monkeypatch):
        captured = {}

        def fake_create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(id="cs_1", url=None, metadata={}, payment_status="unpaid")

        monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)

        apron = CheckoutLineItem(name="Apron", unit_amount=3200, quantity=1)
        _open(StripeGateway("sk_test_123", None), line_items=[apron])

        assert captured["line_items"][0]["price_data"]["product_data"] == {"name": "Apron"}

    def test_provider_error_becomes_gateway_error(self, monkeypatch):
        def failing_create(**kwargs):
            raise stripe.InvalidRequestError("Amount must be positive", param="unit_amount")

        monkeypatch.setattr(stripe.checkout.Session, "create", failing_create)

        with pytest.raises(GatewayError, match="Amount must be positive"):
            _open(StripeGateway("sk_test_123", None))

    def test_signed_event_is_parsed(self):
        payload = json.dumps(
            {"id": "evt_1", "type": "checkout.session.expired", "data": {"object": {"metadata": {"orderId": "o-1"}}}}
        )
        gateway = StripeGateway("sk_test_123", "whsec_123")

        event = gateway.construct_event(payload.encode(), _sign(payload, "whsec_123"))

        assert event.type == "checkout.session.expired"
        assert event.data == {"metadata": {"orderId": "o-1"}}

    def test_bad_signature(self):
        payload = json.dumps({"id": "evt_1", "type": "checkout.session.expired", "data": {"object": {}}})
        gateway = StripeGateway("sk_test_123", "whsec_123")

        with pytest.raises(WebhookSignatureError):
            gateway.construct_event(payload.encode(), _sign(payload, "whsec_other"))

    def test_signed_payload_without_event_type(self):
        payload = json.dumps({"id": "evt_1", "data": {}})
        gateway = StripeGateway("sk_test_123", "whsec_123")

        with pytest.raises(WebhookSignatureError, match="no event type"):
            gateway.construct_event(payload.encode(), _sign(payload, "whsec_123"))

    def test_signed_payload_that_is_not_json(self):
        gateway = StripeGateway("sk_test_123", "whsec_123")

        with pytest.raises(WebhookSignatureError, match="Invalid payload"):
            gateway.construct_event(b"not json", _sign("not json", "whsec_123"))

    def test_completed_session_object_is_flattened(self):
        session = {"id": "cs_1", "object": "checkout.session", "metadata": {"orderId": "o-1"}, "payment_intent": "pi_1"}
        payload = json.dumps(
            {"id": "evt_2", "object": "event", "type": "checkout.session.completed", "data": {"object": session}}
        )
        gateway = StripeGateway("sk_test_123", "whsec_123")

        event = gateway.construct_event(payload.encode(), _sign(payload, "whsec_123"))

        assert event.id == "evt_2"
        assert event.data["metadata"] == {"orderId": "o-1"}
        assert event.data["payment_intent"] == "pi_1"

    def test_missing_webhook_secret(self):
        with pytest.raises(GatewayConfigurationError):
            StripeGateway("sk_test_123", None).construct_event(b"{}", "t=1,v1=abc")


class TestGatewayFactory:
    def test_fake_without_stripe_key(self, monkeypatch):
        monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
        reset_gateway()

        assert isinstance(get_gateway(), FakeGateway)

    def test_stripe_with_secret_key(self, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
        monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_123")
        reset_gateway()

        gateway = get_gateway()
        assert isinstance(gateway, StripeGateway)
        assert gateway.webhook_secret == "whsec_123"

    def test_gateway_is_reused(self):
        reset_gateway()
        assert get_gateway() is get_gateway()

    def test_set_gateway_overrides(self):
        custom = FakeGateway()
        set_gateway(custom)
        assert get_gateway() is custom
