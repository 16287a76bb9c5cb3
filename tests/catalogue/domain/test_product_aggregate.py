"""Tests for the Product aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.product.events import ProductCreated, StockDecremented
from storefront.catalogue.product.product import Product


def _make_product(**overrides):
    defaults = {
        "name": "Stoneware Mug",
        "price": 24.0,
        "category_id": "cat-001",
        "quantity": 5,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_product(self):
        product = _make_product(images=["/uploads/a.jpg", "/uploads/b.jpg"])
        assert product.name == "Stoneware Mug"
        assert product.quantity == 5
        assert product.image_urls == ["/uploads/a.jpg", "/uploads/b.jpg"]

    def test_create_raises_event(self):
        product = _make_product()
        assert len(product._events) == 1
        assert isinstance(product._events[0], ProductCreated)
        assert product._events[0].price == 24.0

    def test_price_is_rounded_to_cents(self):
        product = _make_product(price=9.999)
        assert product.price == 10.0

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(quantity=-1)

    def test_discount_must_be_below_price(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(has_discount=True, discount_price=30.0)
        assert "discount_price" in exc.value.messages

    def test_discount_price_ignored_without_discount_flag(self):
        product = _make_product(has_discount=False, discount_price=30.0)
        assert product.effective_price == 24.0


class TestEffectivePrice:
    def test_list_price_without_discount(self):
        assert _make_product().effective_price == 24.0

    def test_discount_price_when_discount_enabled(self):
        product = _make_product(has_discount=True, discount_price=19.5)
        assert product.effective_price == 19.5

    def test_list_price_when_discount_enabled_without_price(self):
        product = _make_product(has_discount=True)
        assert product.effective_price == 24.0


class TestUpdateDetails:
    def test_partial_update_keeps_other_fields(self):
        product = _make_product(description="Speckled glaze")
        product.update_details(price=22.0)
        assert product.price == 22.0
        assert product.description == "Speckled glaze"
        assert product.name == "Stoneware Mug"

    def test_price_and_discount_change_together(self):
        product = _make_product(price=24.0, has_discount=True, discount_price=20.0)
        # Dropping the price below the old discount is fine when the discount moves too
        product.update_details(price=15.0, discount_price=12.0)
        assert product.effective_price == 12.0

    def test_update_rejects_discount_above_price(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(has_discount=True, discount_price=50.0)


class TestStock:
    def test_in_stock(self):
        product = _make_product(quantity=3)
        assert product.in_stock(3)
        assert not product.in_stock(4)

    def test_decrement_stock(self):
        product = _make_product(quantity=5)
        product.decrement_stock(2)
        assert product.quantity == 3

    def test_decrement_raises_event(self):
        product = _make_product(quantity=5)
        product._events.clear()
        product.decrement_stock(5)
        assert isinstance(product._events[0], StockDecremented)
        assert product._events[0].remaining == 0

    def test_cannot_sell_more_than_stock(self):
        product = _make_product(quantity=1)
        with pytest.raises(ValidationError) as exc:
            product.decrement_stock(2)
        assert exc.value.messages["quantity"] == ["Insufficient stock for Stoneware Mug. Only 1 available."]
        assert product.quantity == 1
