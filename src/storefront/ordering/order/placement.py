"""Place an order straight from the signed-in shopper's cart.

Creating the order, taking the items out of stock and emptying the cart
happen in the same unit of work.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import logger, storefront
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.order.numbering import generate_order_number
from storefront.ordering.order.order import Order, OrderLogAction, OrderStatus, PaymentStatus
from storefront.shared.money import format_eur


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    email = String(required=True, max_length=100)
    phone = String(max_length=30)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    address = String(max_length=200)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    payment_method = String(max_length=50, default="card")


def snapshot_line(product: Product, quantity: int) -> dict:
    images = product.image_urls
    return {
        "product_id": str(product.id),
        "name": product.name,
        "price": product.effective_price,
        "quantity": quantity,
        "image": images[0] if images else None,
    }


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        from storefront.identity.user.user import User

        user = current_domain.repository_for(User).get(command.user_id)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_user(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        product_repo = current_domain.repository_for(Product)
        lines = []
        for cart_item in cart.items:
            product = product_repo.get(cart_item.product_id)
            if not product.in_stock(cart_item.quantity):
                raise ValidationError(
                    {"quantity": [f"Insufficient stock for {product.name}. Only {product.quantity} available."]}
                )
            lines.append((product, cart_item.quantity))

        order = Order.create(
            order_number=generate_order_number(),
            email=command.email,
            items_data=[snapshot_line(product, quantity) for product, quantity in lines],
            user_id=command.user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PAID.value,
            payment_method=command.payment_method,
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
            f"Order {order.order_number} created with {len(order.items)} item(s). Total: {format_eur(order.total)}",
            performed_by=user.email,
        )

        for product, quantity in lines:
            product.decrement_stock(quantity)
            product_repo.add(product)

        cart.clear()
        cart_repo.add(cart)

        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total=order.total,
        )
        return str(order.id)
