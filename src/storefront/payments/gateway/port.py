"""Payment gateway port (abstract interface).

The checkout flow talks to the payment provider only through this contract,
so the hosted Stripe Checkout adapter and the in-process fake are
interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class GatewayError(Exception):
    """The provider refused or failed to serve a request."""


class GatewayConfigurationError(GatewayError):
    """A credential the adapter needs (such as the webhook secret) is missing."""


class WebhookSignatureError(GatewayError):
    """A webhook payload failed signature verification."""


@dataclass(frozen=True)
class CheckoutLineItem:
    name: str
    unit_amount: int  # minor units (cents)
    quantity: int
    description: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str | None = None
    metadata: dict = field(default_factory=dict)
    payment_status: str | None = None


@dataclass(frozen=True)
class GatewayEvent:
    """A verified webhook notification: its type and the object it is about."""

    id: str | None
    type: str
    data: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, body) -> "GatewayEvent":
        """Build an event from a decoded webhook body; a body without a type is refused."""
        if not isinstance(body, dict) or not body.get("type"):
            raise WebhookSignatureError("Webhook payload has no event type")

        data = body.get("data")
        data = data.get("object") if isinstance(data, dict) else None
        return cls(id=body.get("id"), type=body["type"], data=data or {})


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: dict,
    ) -> CheckoutSession:
        """Open a hosted checkout page for the given lines."""
        ...

    @abstractmethod
    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """Look up a previously created checkout session."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        """Verify a webhook payload's signature and parse it into an event."""
        ...
