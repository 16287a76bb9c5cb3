"""FastAPI endpoints for hosted checkout and the payment provider's webhook."""

import json

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.identity.api.deps import optional_user
from storefront.identity.user.user import User
from storefront.payments.api.schemas import (
    CheckoutSessionResponse,
    ConfigureGatewayRequest,
    GatewayConfigResponse,
    SessionVerificationResponse,
    StartCheckoutRequest,
    WebhookReceivedResponse,
)
from storefront.payments.checkout.session import CreateCheckoutOrder, OpenCheckoutSession
from storefront.payments.checkout.verification import verify_session
from storefront.payments.checkout.webhook import process_gateway_event
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import GatewayConfigurationError, GatewayError, WebhookSignatureError
from storefront.settings import get_settings

checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("/sessions", status_code=201, response_model=CheckoutSessionResponse)
async def start_checkout(
    body: StartCheckoutRequest,
    user: User | None = Depends(optional_user),
) -> CheckoutSessionResponse:
    """Create a pending order and open a hosted checkout page for it."""
    shipping = body.shipping_info
    order_id = current_domain.process(
        CreateCheckoutOrder(
            user_id=str(user.id) if user else None,
            items=json.dumps([item.model_dump() for item in body.items]),
            email=shipping.email,
            phone=shipping.phone,
            first_name=shipping.first_name,
            last_name=shipping.last_name,
            address=shipping.address,
            city=shipping.city,
            postal_code=shipping.postal_code,
            country=shipping.country,
        ),
        asynchronous=False,
    )

    try:
        session = current_domain.process(OpenCheckoutSession(order_id=order_id), asynchronous=False)
    except GatewayError as exc:
        logger.error("checkout_session_failed", order_id=order_id, error=str(exc))
        raise HTTPException(status_code=502, detail="Failed to create checkout session")

    return CheckoutSessionResponse(**session)


@checkout_router.post("/webhook", response_model=WebhookReceivedResponse)
async def checkout_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None),
) -> WebhookReceivedResponse:
    """Reconcile an order from a signed payment provider event."""
    if not stripe_signature:
        raise HTTPException(status_code=400, detail="No signature")

    payload = await request.body()
    try:
        event = get_gateway().construct_event(payload, stripe_signature)
    except GatewayConfigurationError as exc:
        logger.error("webhook_not_configured", error=str(exc))
        raise HTTPException(status_code=500, detail="Webhook secret not configured")
    except WebhookSignatureError as exc:
        logger.warning("webhook_signature_rejected", error=str(exc))
        raise HTTPException(status_code=400, detail=f"Webhook Error: {exc}")

    logger.info("webhook_received", event_type=event.type, event_id=event.id)
    process_gateway_event(event)
    return WebhookReceivedResponse()


@checkout_router.get("/verify-session", response_model=SessionVerificationResponse)
async def verify_checkout_session(session_id: str | None = None) -> SessionVerificationResponse:
    try:
        result = verify_session(session_id)
    except GatewayError as exc:
        logger.warning("checkout_session_lookup_failed", session_id=session_id, error=str(exc))
        raise HTTPException(status_code=404, detail="No order found for this session")

    return SessionVerificationResponse(
        order_number=result.order_number,
        payment_status=result.payment_status,
        status=result.status,
    )


@checkout_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Lets manual and load testing exercise the checkout failure path.
    """
    if get_settings().is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
