"""Domain events for the Order aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was created, either directly from the cart or at checkout."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier()
    item_count: Integer(required=True)
    total: Float(required=True)
    payment_status: String(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    """The payment provider confirmed the checkout was paid."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    payment_intent_id: String()
    total: Float(required=True)


@storefront.event(part_of="Order")
class OrderPaymentFailed:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    reason: String(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    status: String(required=True)
    payment_status: String(required=True)


@storefront.event(part_of="Order")
class OrderAmended:
    """An administrator edited the order's details or lines."""

    __version__ = 1

    order_id: Identifier(required=True)
    action: String(required=True)
    total: Float(required=True)
