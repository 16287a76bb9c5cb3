"""Stripe Checkout adapter built on the stripe-python SDK."""

import stripe

from storefront.payments.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    GatewayConfigurationError,
    GatewayError,
    GatewayEvent,
    PaymentGateway,
    WebhookSignatureError,
)


def _free_shipping(currency: str) -> dict:
    """Free standard shipping, delivered in 3-5 business days."""
    return {
        "shipping_rate_data": {
            "type": "fixed_amount",
            "fixed_amount": {"amount": 0, "currency": currency},
            "display_name": "Free shipping",
            "delivery_estimate": {
                "minimum": {"unit": "business_day", "value": 3},
                "maximum": {"unit": "business_day", "value": 5},
            },
        }
    }


def _product_data(item: CheckoutLineItem) -> dict:
    data = {"name": item.name}
    if item.description:
        data["description"] = item.description
    return data


class StripeGateway(PaymentGateway):
    """Hosted Stripe Checkout sessions and signed webhooks."""

    def __init__(self, api_key: str, webhook_secret: str | None) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": _product_data(item),
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
                customer_email=customer_email,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
                shipping_options=[_free_shipping(currency)],
            )
        except stripe.StripeError as exc:
            raise GatewayError(str(exc))

        return CheckoutSession(
            id=session.id,
            url=session.url,
            metadata=dict(session.metadata or {}),
            payment_status=session.payment_status,
        )

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise GatewayError(str(exc))

        return CheckoutSession(
            id=session.id,
            url=session.url,
            metadata=dict(session.metadata or {}),
            payment_status=session.payment_status,
        )

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        if not self.webhook_secret:
            raise GatewayConfigurationError("STRIPE_WEBHOOK_SECRET is not configured")

        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret, api_key=self.api_key)
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError(str(exc))
        except ValueError as exc:
            raise WebhookSignatureError(f"Invalid payload: {exc}")

        return GatewayEvent.from_payload(event.to_dict())
