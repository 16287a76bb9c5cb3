"""Pydantic request/response schemas for the cart, orders and the checkout form."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from storefront.catalogue.api.schemas import ProductResponse
from storefront.ordering.cart.view import CartView
from storefront.ordering.order.order import Order
from storefront.shared.email import is_valid_email

PHONE_PATTERN = re.compile(r"^[\+]?[(]?[0-9]{1,4}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,9}$")
NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s'-]+$")
POSTAL_CODE_PATTERNS = {
    "Portugal": (re.compile(r"^\d{4}-\d{3}$"), "Must be in format XXXX-XXX"),
    "Belgium": (re.compile(r"^\d{4}$"), "Must be in format XXXX"),
}

# --- Checkout form ---


class CheckoutForm(BaseModel):
    """Contact and shipping details collected at checkout."""

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "phone": "+351 912345678",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "address": "Rua das Flores 12",
                    "city": "Lisboa",
                    "postal_code": "1200-195",
                    "country": "Portugal",
                    "payment_method": "card",
                }
            ]
        },
    }

    email: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    address: str = Field(..., min_length=5, max_length=200)
    city: str = Field(..., min_length=2, max_length=100)
    postal_code: str = Field(..., min_length=1)
    country: Literal["Portugal", "Belgium"]
    payment_method: Literal["card"] = "card"

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        value = value.lower()
        if not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("phone")
    @classmethod
    def phone_must_be_dialable(cls, value: str) -> str:
        if not PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone number format")
        digits = re.sub(r"\D", "", value)
        if not 7 <= len(digits) <= 15:
            raise ValueError("Phone number must contain between 7 and 15 digits")
        return value

    @field_validator("first_name", "last_name", "city")
    @classmethod
    def only_letters(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError("Can only contain letters, spaces, hyphens and apostrophes")
        return value

    @model_validator(mode="after")
    def postal_code_matches_country(self) -> CheckoutForm:
        pattern, message = POSTAL_CODE_PATTERNS[self.country]
        if not pattern.match(self.postal_code):
            raise ValueError(f"postal_code: {message}")
        return self


# --- Cart Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "2f0c9b7e", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    product: ProductResponse


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: float
    item_count: int

    @classmethod
    def from_view(cls, view: CartView) -> CartResponse:
        return cls(
            items=[
                CartLineResponse(
                    id=line.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    product=ProductResponse.from_product(line.product),
                )
                for line in view.items
            ],
            total=view.total,
            item_count=view.item_count,
        )


class RemovedResponse(BaseModel):
    removed: bool


class ClearedResponse(BaseModel):
    cleared: bool


# --- Order Admin Request Schemas ---


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped", "payment_status": "paid"}]}}

    status: str | None = Field(None, max_length=20)
    payment_status: str | None = Field(None, max_length=20)


class UpdateOrderDetailsRequest(BaseModel):
    email: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    payment_method: str | None = Field(None, max_length=50)


class UpdateOrderItemRequest(BaseModel):
    quantity: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)


class AddOrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


# --- Order Response Schemas ---


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    price: float
    quantity: int
    image: str | None = None


class OrderLogResponse(BaseModel):
    id: str
    action: str
    description: str
    performed_by: str | None = None
    created_at: datetime | None = None


class OrderResponse(BaseModel):
    id: str
    order_number: str
    user_id: str | None = None
    status: str
    payment_status: str
    email: str
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    payment_method: str | None = None
    subtotal: float
    tax: float
    shipping: float
    total: float
    items: list[OrderItemResponse]
    logs: list[OrderLogResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order: Order, include_logs: bool = False) -> OrderResponse:
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            user_id=str(order.user_id) if order.user_id else None,
            status=order.status,
            payment_status=order.payment_status,
            email=order.email,
            phone=order.phone,
            first_name=order.first_name,
            last_name=order.last_name,
            address=order.address,
            city=order.city,
            postal_code=order.postal_code,
            country=order.country,
            payment_method=order.payment_method,
            subtotal=order.subtotal,
            tax=order.tax,
            shipping=order.shipping,
            total=order.total,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in sorted(order.items, key=lambda i: i.created_at)
            ],
            logs=[
                OrderLogResponse(
                    id=str(log.id),
                    action=log.action,
                    description=log.description,
                    performed_by=log.performed_by,
                    created_at=log.created_at,
                )
                for log in order.sorted_logs()
            ]
            if include_logs
            else [],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
