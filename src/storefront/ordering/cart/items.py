"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartItemQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_id = Identifier(required=True)


def _ensure_stock(product_id, quantity):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.in_stock(quantity):
        raise ValidationError({"quantity": ["Not enough stock available"]})
    return product


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id) or ShoppingCart.create(user_id=command.user_id)

        # Only the requested quantity is checked; placing the order checks the merged line
        quantity = command.quantity or 1
        _ensure_stock(command.product_id, quantity)

        cart.add_item(product_id=command.product_id, quantity=quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        if command.quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than 0"]})

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None or cart.item_for(command.product_id) is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        _ensure_stock(command.product_id, command.quantity)

        cart.update_item_quantity(product_id=command.product_id, new_quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            return False

        removed = cart.remove_item(product_id=command.product_id)
        if removed:
            repo.add(cart)
        return removed

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is not None and cart.items:
            cart.clear()
            repo.add(cart)
        return True
