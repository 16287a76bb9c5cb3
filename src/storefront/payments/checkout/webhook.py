"""Reconcile orders from the payment provider's webhook notifications.

- ``checkout.session.completed``: the order is paid. Marking it paid,
  taking its items out of stock, logging the payment and emptying the
  buyer's cart happen in one unit of work.
- ``checkout.session.expired``: the order is cancelled and its payment failed.
- ``payment_intent.payment_failed``: same, for the order holding the intent.

Other event types are acknowledged and ignored.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import logger, storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.order import Order, OrderLogAction
from storefront.payments.gateway.port import GatewayEvent

SESSION_COMPLETED = "checkout.session.completed"
SESSION_EXPIRED = "checkout.session.expired"
PAYMENT_FAILED = "payment_intent.payment_failed"


@storefront.command(part_of="Order")
class CompleteCheckout:
    order_id = Identifier(required=True)
    payment_intent_id = String(max_length=255)


@storefront.command(part_of="Order")
class ExpireCheckout:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class FailCheckoutPayment:
    payment_intent_id = String(required=True, max_length=255)
    failure_message = Text()


@storefront.command_handler(part_of=Order)
class CheckoutWebhookHandler:
    @handle(CompleteCheckout)
    def complete_checkout(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if order.is_paid:
            logger.info("checkout_already_completed", order_id=str(order.id))
            return

        order.complete_payment(command.payment_intent_id)

        product_repo = current_domain.repository_for(Product)
        products = product_repo.find_by_ids(item.product_id for item in order.items)
        for item in order.items:
            product = products.get(str(item.product_id))
            if product is None:
                logger.warning("paid_item_without_product", order_id=str(order.id), product_id=str(item.product_id))
                continue

            shortfall = max(item.quantity - product.quantity, 0)
            product.decrement_stock(item.quantity - shortfall)
            product_repo.add(product)

            if shortfall:
                order.log(
                    OrderLogAction.STOCK_SHORTAGE,
                    f"{item.name}: {shortfall} unit(s) sold beyond available stock",
                    performed_by="system",
                )
                logger.warning(
                    "stock_shortage",
                    order_id=str(order.id),
                    product_id=str(product.id),
                    shortfall=shortfall,
                )

        if order.user_id:
            cart_repo = current_domain.repository_for(ShoppingCart)
            cart = cart_repo.find_for_user(order.user_id)
            if cart is not None and cart.items:
                cart.clear()
                cart_repo.add(cart)

        repo.add(order)
        logger.info("checkout_completed", order_id=str(order.id), order_number=order.order_number)

    @handle(ExpireCheckout)
    def expire_checkout(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if order.is_paid:
            logger.warning("expired_session_for_paid_order", order_id=str(order.id))
            return

        order.fail_payment("Checkout session expired")
        repo.add(order)
        logger.info("checkout_expired", order_id=str(order.id))

    @handle(FailCheckoutPayment)
    def fail_checkout_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_payment_intent(command.payment_intent_id)
        if order is None:
            logger.info("payment_failure_without_order", payment_intent_id=command.payment_intent_id)
            return

        order.fail_payment(f"Payment failed: {command.failure_message or 'Unknown error'}")
        repo.add(order)
        logger.info("checkout_payment_failed", order_id=str(order.id))


def process_gateway_event(event: GatewayEvent) -> None:
    """Turn a verified webhook event into the matching command."""
    data = event.data or {}

    if event.type == SESSION_COMPLETED:
        order_id = (data.get("metadata") or {}).get("orderId")
        if not order_id:
            logger.error("webhook_missing_order_id", event_id=event.id)
            raise ValidationError({"metadata": ["No orderId in metadata"]})
        current_domain.process(
            CompleteCheckout(order_id=order_id, payment_intent_id=data.get("payment_intent")),
            asynchronous=False,
        )

    elif event.type == SESSION_EXPIRED:
        order_id = (data.get("metadata") or {}).get("orderId")
        if order_id:
            current_domain.process(ExpireCheckout(order_id=order_id), asynchronous=False)

    elif event.type == PAYMENT_FAILED:
        error = data.get("last_payment_error") or {}
        current_domain.process(
            FailCheckoutPayment(payment_intent_id=data["id"], failure_message=error.get("message")),
            asynchronous=False,
        )

    else:
        logger.info("webhook_event_unhandled", event_type=event.type, event_id=event.id)
