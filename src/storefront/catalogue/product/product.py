"""Product aggregate with its stock counter and image gallery."""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import round_money

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.aggregate
class Product:
    """A sellable item with a price, an optional discount and a stock count.

    ``quantity`` is the units in stock and never drops below zero. ``images``
    holds the ordered gallery URLs as a JSON array.
    """

    name: String(required=True, max_length=255)
    description: Text(default="")
    price: Float(required=True, min_value=0.0)
    has_discount: Boolean(default=False)
    discount_price: Float(min_value=0.0)
    quantity: Integer(default=0, min_value=0)
    images: Text()
    category_id: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def discount_must_be_below_price(self):
        if self.has_discount and self.discount_price is not None and self.discount_price >= self.price:
            raise ValidationError({"discount_price": ["Discount price must be lower than the regular price"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        category_id,
        description="",
        has_discount=False,
        discount_price=None,
        quantity=0,
        images=None,
    ):
        from storefront.catalogue.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            price=round_money(price),
            has_discount=bool(has_discount),
            discount_price=round_money(discount_price) if discount_price is not None else None,
            quantity=quantity,
            images=json.dumps(list(images or [])),
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                category_id=category_id,
                price=product.price,
                quantity=product.quantity,
            )
        )
        return product

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def effective_price(self) -> float:
        """The price a buyer pays: the discount price when a discount is on."""
        if self.has_discount and self.discount_price is not None:
            return self.discount_price
        return self.price

    def in_stock(self, quantity: int) -> bool:
        return self.quantity >= quantity

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        has_discount=_UNSET,
        discount_price=_UNSET,
        quantity=_UNSET,
        images=_UNSET,
        category_id=_UNSET,
    ):
        from storefront.catalogue.product.events import ProductUpdated

        with atomic_change(self):
            if name is not _UNSET:
                self.name = name
            if description is not _UNSET:
                self.description = description or ""
            if price is not _UNSET:
                self.price = round_money(price)
            if has_discount is not _UNSET:
                self.has_discount = bool(has_discount)
            if discount_price is not _UNSET:
                self.discount_price = round_money(discount_price) if discount_price is not None else None
            if quantity is not _UNSET:
                self.quantity = quantity
            if images is not _UNSET:
                self.images = json.dumps(list(images or []))
            if category_id is not _UNSET:
                self.category_id = category_id

            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                quantity=self.quantity,
            )
        )

    def decrement_stock(self, quantity: int):
        """Take sold units out of stock."""
        from storefront.catalogue.product.events import StockDecremented

        if quantity > self.quantity:
            raise ValidationError({"quantity": [f"Insufficient stock for {self.name}. Only {self.quantity} available."]})

        self.quantity -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                remaining=self.quantity,
            )
        )


@storefront.repository(part_of=Product)
class ProductRepository:
    def count_in_category(self, category_id) -> int:
        return self._dao.query.filter(category_id=str(category_id)).all().total

    def count_all(self) -> int:
        return self._dao.query.all().total

    def count_low_stock(self, threshold: int) -> int:
        return self._dao.query.filter(quantity__lt=threshold).all().total

    def find_by_ids(self, product_ids) -> dict:
        ids = [str(product_id) for product_id in product_ids]
        if not ids:
            return {}
        products = self._dao.query.filter(id__in=ids).limit(len(ids)).all().items
        return {str(product.id): product for product in products}
