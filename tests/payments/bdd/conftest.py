"""Shared BDD fixtures and step definitions for checkout reconciliation."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order
from storefront.payments.checkout.session import CreateCheckoutOrder


@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def _a_product(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, quantity=stock)


@given(parsers.cfparse('a pending checkout order for {quantity:d} "{name}"'), target_fixture="order_id")
def _pending_checkout_order(products, quantity, name):
    return current_domain.process(
        CreateCheckoutOrder(
            items=json.dumps([{"product_id": products[name], "quantity": quantity}]),
            email="jane@example.com",
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('only {stock:d} "{name}" is left in stock'))
def _stock_left(products, stock, name):
    repo = current_domain.repository_for(Product)
    product = repo.get(products[name])
    product.update_details(quantity=stock)
    repo.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}" with payment "{payment_status}"'))
def _order_state(order_id, status, payment_status):
    order = current_domain.repository_for(Order).get(order_id)
    assert order.status == status
    assert order.payment_status == payment_status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _product_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).quantity == stock


@then(parsers.cfparse('the order log records "{action}" {count:d} time'))
def _log_records(order_id, action, count):
    order = current_domain.repository_for(Order).get(order_id)
    assert [log.action for log in order.logs].count(action) == count
