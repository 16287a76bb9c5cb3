"""Shared BDD fixtures and step definitions for the cart and orders."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from storefront.catalogue.product.product import Product
from storefront.ordering.cart.view import cart_view
from storefront.shared.errors import error_message


@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


@pytest.fixture()
def error():
    """Holds the ValidationError raised by the last When step, if any."""
    return {}


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def _a_product(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, quantity=stock)


@given("a signed-in shopper", target_fixture="user_id")
def _signed_in_shopper(make_user):
    return make_user()


@then(parsers.cfparse("the cart holds {count:d} items"))
def _cart_holds(user_id, count):
    assert cart_view(user_id).item_count == count


@then(parsers.cfparse("the cart has {count:d} line"))
def _cart_has_lines(user_id, count):
    assert len(cart_view(user_id).items) == count


@then(parsers.cfparse("the cart total is {total:f}"))
def _cart_total(user_id, total):
    assert cart_view(user_id).total == total


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _product_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).quantity == stock


@then(parsers.cfparse('the request is refused with "{message}"'))
def _request_refused(error, message):
    assert isinstance(error.get("exc"), ValidationError)
    assert error_message(error["exc"]) == message
