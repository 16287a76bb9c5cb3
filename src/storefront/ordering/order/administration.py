"""Back-office order edits: commands and handler.

Every edit is written to the order log with the acting admin's email.
Line edits reprice the order.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.ordering.order.order import Order, OrderStatus, PaymentStatus


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(max_length=20)
    payment_status = String(max_length=20)
    performed_by = String(max_length=255)


@storefront.command(part_of="Order")
class UpdateOrderDetails:
    order_id = Identifier(required=True)
    email = String(max_length=100)
    phone = String(max_length=30)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    address = String(max_length=200)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    payment_method = String(max_length=50)
    performed_by = String(max_length=255)


@storefront.command(part_of="Order")
class UpdateOrderItem:
    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(min_value=1)
    price = Float(min_value=0.0)
    performed_by = String(max_length=255)


@storefront.command(part_of="Order")
class RemoveOrderItem:
    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    performed_by = String(max_length=255)


@storefront.command(part_of="Order")
class AddOrderItem:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    performed_by = String(max_length=255)


def _parse_status(enum_cls, value, field):
    if not value:
        return None
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field: [f"Must be one of {allowed}"]})


@storefront.command_handler(part_of=Order)
class AdministerOrderHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        status = _parse_status(OrderStatus, command.status, "status")
        payment_status = _parse_status(PaymentStatus, command.payment_status, "payment_status")

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(status=status, payment_status=payment_status, performed_by=command.performed_by)
        repo.add(order)
        logger.info(
            "order_status_updated",
            order_id=str(order.id),
            status=order.status,
            payment_status=order.payment_status,
        )

    @handle(UpdateOrderDetails)
    def update_order_details(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        changes = order.update_details(
            performed_by=command.performed_by,
            email=command.email,
            phone=command.phone,
            first_name=command.first_name,
            last_name=command.last_name,
            address=command.address,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
            payment_method=command.payment_method,
        )
        repo.add(order)
        logger.info("order_details_updated", order_id=str(order.id), changes=len(changes))

    @handle(UpdateOrderItem)
    def update_order_item(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_item(
            command.item_id,
            quantity=command.quantity,
            price=command.price,
            performed_by=command.performed_by,
        )
        repo.add(order)

    @handle(RemoveOrderItem)
    def remove_order_item(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.remove_item(command.item_id, performed_by=command.performed_by)
        repo.add(order)

    @handle(AddOrderItem)
    def add_order_item(self, command):
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        images = product.image_urls
        order.add_item(
            product_id=str(product.id),
            name=product.name,
            price=command.price,
            quantity=command.quantity,
            image=images[0] if images else None,
            performed_by=command.performed_by,
        )
        repo.add(order)
