"""Pydantic request/response schemas for hosted checkout."""

from pydantic import BaseModel, Field

from storefront.ordering.api.schemas import CheckoutForm

# --- Request Schemas ---


class CheckoutItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class StartCheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "2f0c9b7e", "quantity": 2}],
                    "shipping_info": {
                        "email": "jane.doe@example.com",
                        "phone": "+32 470123456",
                        "first_name": "Jane",
                        "last_name": "Doe",
                        "address": "Rue de la Loi 16",
                        "city": "Bruxelles",
                        "postal_code": "1000",
                        "country": "Belgium",
                        "payment_method": "card",
                    },
                }
            ]
        }
    }

    items: list[CheckoutItem] = Field(default_factory=list)
    shipping_info: CheckoutForm


class ConfigureGatewayRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"should_succeed": False, "failure_reason": "Card network down"}]}
    }

    should_succeed: bool = True
    failure_reason: str = Field("Checkout unavailable", max_length=255)


# --- Response Schemas ---


class CheckoutSessionResponse(BaseModel):
    session_id: str
    url: str
    order_id: str


class WebhookReceivedResponse(BaseModel):
    received: bool = True


class SessionVerificationResponse(BaseModel):
    order_number: str
    payment_status: str
    status: str


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
