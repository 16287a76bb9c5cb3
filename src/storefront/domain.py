"""Storefront domain: catalogue, accounts, carts, orders and checkout.

A single composition root: the checkout path touches orders, product stock
and carts inside one unit of work, so every aggregate lives in one domain.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
