"""Hosted checkout: the first two steps of the payment path.

1. ``CreateCheckoutOrder`` checks stock and records a pending order.
2. ``OpenCheckoutSession`` opens the provider's hosted checkout page for that
   order and remembers the session id on it.

Each step is its own unit of work. The order is paid, or cancelled, later
by the provider's webhook.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import logger, storefront
from storefront.ordering.order.numbering import generate_order_number
from storefront.ordering.order.order import Order, OrderLogAction, OrderStatus, PaymentStatus
from storefront.ordering.order.placement import snapshot_line
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import CheckoutLineItem
from storefront.settings import get_settings
from storefront.shared.money import to_cents


@storefront.command(part_of="Order")
class CreateCheckoutOrder:
    user_id = Identifier()  # Absent for guest checkout
    items = Text(required=True)  # JSON: [{"product_id": ..., "quantity": ...}]
    email = String(required=True, max_length=100)
    phone = String(max_length=30)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    address = String(max_length=200)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)


@storefront.command(part_of="Order")
class OpenCheckoutSession:
    order_id = Identifier(required=True)


def _requested_lines(raw_items) -> list[tuple[str, int]]:
    """One ``(product_id, quantity)`` pair per product, summing repeated lines."""
    items = json.loads(raw_items) if isinstance(raw_items, str) else raw_items
    if not items:
        raise ValidationError({"items": ["No items in cart"]})

    quantities = {}
    for item in items:
        quantity = int(item.get("quantity") or 0)
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        product_id = str(item["product_id"])
        quantities[product_id] = quantities.get(product_id, 0) + quantity
    return list(quantities.items())


def _description(product: Product | None) -> str | None:
    return product.description or None if product is not None else None


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(CreateCheckoutOrder)
    def create_checkout_order(self, command):
        lines = _requested_lines(command.items)

        products = current_domain.repository_for(Product).find_by_ids(product_id for product_id, _ in lines)
        missing = [product_id for product_id, _ in lines if product_id not in products]
        if missing:
            raise ValidationError({"items": ["Some products not found"]})

        for product_id, quantity in lines:
            product = products[product_id]
            if not product.in_stock(quantity):
                raise ValidationError({"quantity": [f"Insufficient stock for {product.name}"]})

        order = Order.create(
            order_number=generate_order_number(),
            email=command.email,
            items_data=[snapshot_line(products[product_id], quantity) for product_id, quantity in lines],
            user_id=command.user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            payment_method="stripe",
            tax_rate=get_settings().checkout_tax_rate,
            phone=command.phone,
            first_name=command.first_name,
            last_name=command.last_name,
            address=command.address,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        order.log(
            OrderLogAction.ORDER_CREATED,
            "Order created and awaiting payment",
            performed_by=str(command.user_id) if command.user_id else "guest",
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "checkout_order_created",
            order_id=str(order.id),
            order_number=order.order_number,
            guest=command.user_id is None,
            total=order.total,
        )
        return str(order.id)

    @handle(OpenCheckoutSession)
    def open_checkout_session(self, command):
        settings = get_settings()
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        products = current_domain.repository_for(Product).find_by_ids(item.product_id for item in order.items)
        line_items = [
            CheckoutLineItem(
                name=item.name,
                unit_amount=to_cents(item.price),
                quantity=item.quantity,
                description=_description(products.get(str(item.product_id))),
            )
            for item in order.items
        ]

        session = get_gateway().create_checkout_session(
            line_items=line_items,
            currency=settings.currency,
            customer_email=order.email,
            success_url=f"{settings.app_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.app_url}/checkout/cancel?order_id={order.id}",
            metadata={"orderId": str(order.id), "orderNumber": order.order_number},
        )

        order.attach_checkout_session(session.id)
        repo.add(order)

        logger.info("checkout_session_opened", order_id=str(order.id), session_id=session.id)
        return {"session_id": session.id, "url": session.url, "order_id": str(order.id)}
