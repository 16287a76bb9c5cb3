"""Read-side view of a shopper's cart, priced at current catalogue prices."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.ordering.cart.cart import ShoppingCart
from storefront.shared.money import round_money


@dataclass
class CartLine:
    id: str
    product_id: str
    quantity: int
    product: Product


@dataclass
class CartView:
    items: list[CartLine] = field(default_factory=list)
    total: float = 0.0
    item_count: int = 0


def cart_view(user_id=None) -> CartView:
    """Build the cart for ``user_id``; anonymous visitors get an empty cart.

    Lines whose product has since been deleted are left out. The total uses
    the list price, as the cart page does; checkout applies discounts.
    """
    if user_id is None:
        return CartView()

    cart = current_domain.repository_for(ShoppingCart).find_for_user(user_id)
    if cart is None or not cart.items:
        return CartView()

    products = current_domain.repository_for(Product).find_by_ids(item.product_id for item in cart.items)

    lines = [
        CartLine(
            id=str(item.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            product=products[str(item.product_id)],
        )
        for item in sorted(cart.items, key=lambda i: i.added_at)
        if str(item.product_id) in products
    ]

    return CartView(
        items=lines,
        total=round_money(sum(line.product.price * line.quantity for line in lines)),
        item_count=sum(line.quantity for line in lines),
    )
