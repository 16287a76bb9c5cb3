"""Look up an order's payment state from its checkout session."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.ordering.order.order import Order
from storefront.payments.gateway import get_gateway


@dataclass(frozen=True)
class SessionVerification:
    order_number: str
    payment_status: str
    status: str


def verify_session(session_id: str | None) -> SessionVerification:
    if not session_id:
        raise ValidationError({"session_id": ["Session ID required"]})

    session = get_gateway().retrieve_checkout_session(session_id)
    order_id = (session.metadata or {}).get("orderId")
    if not order_id:
        raise ObjectNotFoundError("No order found for this session")

    order = current_domain.repository_for(Order).get(order_id)
    return SessionVerification(
        order_number=order.order_number,
        payment_status=order.payment_status,
        status=order.status,
    )
