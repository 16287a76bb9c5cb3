"""Loads every module that declares domain elements.

``storefront.init()`` only walks the domain root and its direct
subdirectories, while aggregates, commands and handlers live one level
further down (``catalogue/product/product.py``). Importing them here, from
the root, registers them before the domain is initialized.
"""

from storefront.activity import activity_log, tracking  # noqa: F401
from storefront.catalogue.category import category, management as category_management  # noqa: F401
from storefront.catalogue.category import events as category_events  # noqa: F401
from storefront.catalogue.product import events as product_events  # noqa: F401
from storefront.catalogue.product import management as product_management  # noqa: F401
from storefront.catalogue.product import product  # noqa: F401
from storefront.identity.favorite import favorite, toggling  # noqa: F401
from storefront.identity.user import administration as user_administration  # noqa: F401
from storefront.identity.user import authentication, profile, registration, user  # noqa: F401
from storefront.identity.user import events as user_events  # noqa: F401
from storefront.ordering.cart import cart, items  # noqa: F401
from storefront.ordering.cart import events as cart_events  # noqa: F401
from storefront.ordering.order import administration as order_administration  # noqa: F401
from storefront.ordering.order import events as order_events  # noqa: F401
from storefront.ordering.order import order, placement  # noqa: F401
from storefront.payments.checkout import session, webhook  # noqa: F401
