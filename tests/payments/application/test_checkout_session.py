"""Application tests for creating checkout orders and opening hosted sessions."""

import json
from uuid import uuid4

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order, OrderLogAction, OrderStatus, PaymentStatus
from storefront.payments.checkout.session import CreateCheckoutOrder, OpenCheckoutSession
from storefront.payments.gateway.port import GatewayError

CONTACT = {
    "email": "jane@example.com",
    "phone": "+32470123456",
    "first_name": "Jane",
    "last_name": "Doe",
    "address": "Rue de la Loi 16",
    "city": "Bruxelles",
    "postal_code": "1000",
    "country": "Belgium",
}


def _create_order(items, user_id=None):
    return current_domain.process(
        CreateCheckoutOrder(user_id=user_id, items=json.dumps(items), **CONTACT),
        asynchronous=False,
    )


class TestCreateCheckoutOrder:
    def test_pending_order_with_tax(self, make_product):
        product_id = make_product(price=50.0)

        order = current_domain.repository_for(Order).get(_create_order([{"product_id": product_id, "quantity": 2}]))
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value
        assert order.payment_method == "stripe"
        assert order.subtotal == 100.0
        assert order.tax == 23.0
        assert order.total == 123.0
        assert order.country == "Belgium"

    def test_discounted_price_is_charged(self, make_product):
        product_id = make_product(price=50.0, has_discount=True, discount_price=40.0)

        order = current_domain.repository_for(Order).get(_create_order([{"product_id": product_id, "quantity": 1}]))
        assert order.items[0].price == 40.0
        assert order.subtotal == 40.0

    def test_guest_order_is_logged_as_guest(self, make_product):
        order_id = _create_order([{"product_id": make_product(), "quantity": 1}])

        order = current_domain.repository_for(Order).get(order_id)
        assert order.user_id is None
        log = order.sorted_logs()[0]
        assert log.action == OrderLogAction.ORDER_CREATED.value
        assert log.description == "Order created and awaiting payment"
        assert log.performed_by == "guest"

    def test_signed_in_order_is_logged_with_user_id(self, make_user, make_product):
        user_id = make_user()
        order_id = _create_order([{"product_id": make_product(), "quantity": 1}], user_id=user_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert str(order.user_id) == str(user_id)
        assert order.sorted_logs()[0].performed_by == str(user_id)

    def test_stock_is_not_taken_yet(self, make_product):
        product_id = make_product(quantity=5)
        _create_order([{"product_id": product_id, "quantity": 2}])

        assert current_domain.repository_for(Product).get(product_id).quantity == 5

    def test_no_items(self):
        with pytest.raises(ValidationError) as exc:
            _create_order([])
        assert exc.value.messages["items"] == ["No items in cart"]

    def test_unknown_product(self, make_product):
        items = [{"product_id": make_product(), "quantity": 1}, {"product_id": str(uuid4()), "quantity": 1}]

        with pytest.raises(ValidationError) as exc:
            _create_order(items)
        assert exc.value.messages["items"] == ["Some products not found"]

    def test_insufficient_stock(self, make_product):
        product_id = make_product(name="Tea Bowl", quantity=1)

        with pytest.raises(ValidationError) as exc:
            _create_order([{"product_id": product_id, "quantity": 2}])
        assert exc.value.messages["quantity"] == ["Insufficient stock for Tea Bowl"]

    def test_repeated_lines_are_checked_against_stock_together(self, make_product):
        product_id = make_product(name="Tea Bowl", quantity=5)
        items = [{"product_id": product_id, "quantity": 3}, {"product_id": product_id, "quantity": 3}]

        with pytest.raises(ValidationError) as exc:
            _create_order(items)
        assert exc.value.messages["quantity"] == ["Insufficient stock for Tea Bowl"]
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_repeated_lines_are_merged(self, make_product):
        product_id = make_product(price=10.0, quantity=5)
        items = [{"product_id": product_id, "quantity": 2}, {"product_id": product_id, "quantity": 3}]

        order = current_domain.repository_for(Order).get(_create_order(items))
        [line] = order.items
        assert line.quantity == 5
        assert order.subtotal == 50.0


class TestOpenCheckoutSession:
    def test_session_is_attached_to_order(self, make_product, fake_gateway):
        order_id = _create_order([{"product_id": make_product(price=50.0), "quantity": 2}])

        result = current_domain.process(OpenCheckoutSession(order_id=order_id), asynchronous=False)

        assert result["order_id"] == order_id
        assert result["session_id"].startswith("cs_test_")
        assert result["url"].endswith(result["session_id"])
        order = current_domain.repository_for(Order).get(order_id)
        assert order.checkout_session_id == result["session_id"]

    def test_gateway_receives_lines_and_redirects(self, make_product, fake_gateway, monkeypatch):
        monkeypatch.setenv("APP_URL", "https://shop.example.com/")
        order_id = _create_order([{"product_id": make_product(price=50.0), "quantity": 2}])

        current_domain.process(OpenCheckoutSession(order_id=order_id), asynchronous=False)

        call = fake_gateway.calls[-1]
        order = current_domain.repository_for(Order).get(order_id)
        assert call["currency"] == "eur"
        assert call["customer_email"] == "jane@example.com"
        assert call["success_url"] == "https://shop.example.com/checkout/success?session_id={CHECKOUT_SESSION_ID}"
        assert call["cancel_url"] == f"https://shop.example.com/checkout/cancel?order_id={order_id}"
        assert call["metadata"] == {"orderId": order_id, "orderNumber": order.order_number}

        [line] = call["line_items"]
        assert line.name == "Stoneware Mug"
        assert line.unit_amount == 5000
        assert line.quantity == 2
        assert line.description == "Stoneware Mug from the studio"

    def test_gateway_failure_leaves_order_pending(self, make_product, fake_gateway):
        fake_gateway.configure(should_succeed=False, failure_reason="Card network down")
        order_id = _create_order([{"product_id": make_product(), "quantity": 1}])

        with pytest.raises(GatewayError):
            current_domain.process(OpenCheckoutSession(order_id=order_id), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.checkout_session_id is None
        assert order.payment_status == PaymentStatus.PENDING.value
