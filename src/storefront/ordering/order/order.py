"""Order aggregate with its line items and audit log.

Status and payment status are plain enums set by direct assignment: the
storefront has no transition rules beyond what each operation sets. Every
change that matters to staff is written to the order's log.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import (
    OrderAmended,
    OrderPaid,
    OrderPaymentFailed,
    OrderPlaced,
    OrderStatusChanged,
)
from storefront.shared.money import format_eur, round_money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class OrderLogAction(Enum):
    ORDER_CREATED = "ORDER_CREATED"
    PAYMENT_COMPLETED = "PAYMENT_COMPLETED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    STATUS_UPDATED = "STATUS_UPDATED"
    DETAILS_UPDATED = "DETAILS_UPDATED"
    ITEM_UPDATED = "ITEM_UPDATED"
    ITEM_REMOVED = "ITEM_REMOVED"
    ITEM_ADDED = "ITEM_ADDED"
    STOCK_SHORTAGE = "STOCK_SHORTAGE"


# Editable contact fields and the label used for them in the order log
DETAIL_LABELS = {
    "email": "Email",
    "phone": "Phone",
    "first_name": "First name",
    "last_name": "Last name",
    "address": "Address",
    "city": "City",
    "postal_code": "Postal code",
    "country": "Country",
    "payment_method": "Payment method",
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line captured at order time.

    Name, price and image are copied from the product so later catalogue
    edits do not change what the buyer ordered.
    """

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)
    created_at = DateTime()

    @property
    def line_total(self) -> float:
        return round_money(self.price * self.quantity)


@storefront.entity(part_of="Order")
class OrderLog:
    action = String(required=True, choices=OrderLogAction)
    description = Text(required=True)
    performed_by = String(max_length=255)
    created_at = DateTime()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=50)
    user_id = Identifier()  # Nullable for guest checkout
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    email = String(required=True, max_length=100)
    phone = String(max_length=30)
    first_name = String(max_length=50)
    last_name = String(max_length=50)
    address = String(max_length=200)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    payment_method = String(max_length=50)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping = Float(default=0.0)
    total = Float(default=0.0)
    checkout_session_id = String(max_length=255)
    payment_intent_id = String(max_length=255)
    items = HasMany(OrderItem)
    logs = HasMany(OrderLog)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_number,
        email,
        items_data,
        user_id=None,
        status=OrderStatus.PENDING.value,
        payment_status=PaymentStatus.PENDING.value,
        payment_method=None,
        tax_rate=0.0,
        shipping=0.0,
        **contact,
    ):
        """Create an order from line dicts with product_id, name, price, quantity and image."""
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            user_id=user_id,
            status=status,
            payment_status=payment_status,
            email=email,
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
            **contact,
        )

        for data in items_data:
            order.add_items(
                OrderItem(
                    product_id=data["product_id"],
                    name=data["name"],
                    price=round_money(data["price"]),
                    quantity=data["quantity"],
                    image=data.get("image"),
                    created_at=now,
                )
            )

        subtotal = round_money(sum(item.price * item.quantity for item in order.items))
        tax = round_money(subtotal * tax_rate)
        order.subtotal = subtotal
        order.tax = tax
        order.shipping = round_money(shipping)
        order.total = round_money(subtotal + tax + shipping)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id) if user_id else None,
                item_count=len(order.items),
                total=order.total,
                payment_status=payment_status,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def customer_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def item(self, item_id) -> OrderItem:
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Order item not found"]})
        return item

    def sorted_logs(self) -> list[OrderLog]:
        return sorted(self.logs, key=lambda log: log.created_at)

    def log(self, action: OrderLogAction, description: str, performed_by: str | None = None):
        self.add_logs(
            OrderLog(
                action=action.value,
                description=description,
                performed_by=performed_by,
                created_at=datetime.now(UTC),
            )
        )

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def _recalculate_totals(self):
        """Admin edits reprice the order without tax or shipping."""
        self.subtotal = round_money(sum(item.price * item.quantity for item in self.items))
        self.tax = 0.0
        self.shipping = 0.0
        self.total = self.subtotal

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def attach_checkout_session(self, session_id: str):
        self.checkout_session_id = session_id
        self._touch()

    def complete_payment(self, payment_intent_id: str | None):
        self.payment_status = PaymentStatus.PAID.value
        self.status = OrderStatus.PROCESSING.value
        self.payment_intent_id = payment_intent_id
        self._touch()

        self.log(
            OrderLogAction.PAYMENT_COMPLETED,
            f"Payment completed via Stripe. Payment Intent: {payment_intent_id}",
            performed_by="system",
        )
        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                order_number=self.order_number,
                payment_intent_id=payment_intent_id,
                total=self.total,
            )
        )

    def fail_payment(self, reason: str):
        self.status = OrderStatus.CANCELLED.value
        self.payment_status = PaymentStatus.FAILED.value
        self._touch()

        self.log(OrderLogAction.PAYMENT_FAILED, reason, performed_by="system")
        self.raise_(
            OrderPaymentFailed(
                order_id=str(self.id),
                order_number=self.order_number,
                reason=reason,
            )
        )

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_status(
        self,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        performed_by=None,
    ):
        parts = []
        if status is not None:
            self.status = status.value
            parts.append(f"Status changed to {status.value}")
        if payment_status is not None:
            self.payment_status = payment_status.value
            parts.append(f"Payment status changed to {payment_status.value}")
        self._touch()

        if parts:
            self.log(OrderLogAction.STATUS_UPDATED, ", ".join(parts), performed_by)
            self.raise_(
                OrderStatusChanged(
                    order_id=str(self.id),
                    status=self.status,
                    payment_status=self.payment_status,
                )
            )

    def update_details(self, performed_by=None, **details) -> list[str]:
        """Apply non-empty contact changes and log one clause per changed field."""
        changes = []
        for field, label in DETAIL_LABELS.items():
            value = details.get(field)
            if not value or value == getattr(self, field):
                continue
            changes.append(f'{label} changed from "{getattr(self, field)}" to "{value}"')
            setattr(self, field, value)
        self._touch()

        if changes:
            self.log(OrderLogAction.DETAILS_UPDATED, "; ".join(changes), performed_by)
            self._amended(OrderLogAction.DETAILS_UPDATED)
        return changes

    def update_item(self, item_id, quantity=None, price=None, performed_by=None):
        item = self.item(item_id)

        changes = []
        if quantity is not None and quantity != item.quantity:
            changes.append(f"Quantity changed from {item.quantity} to {quantity}")
            item.quantity = quantity
        if price is not None and round_money(price) != item.price:
            changes.append(f"Price changed from {format_eur(item.price)} to {format_eur(price)}")
            item.price = round_money(price)

        self._recalculate_totals()
        self._touch()

        if changes:
            self.log(OrderLogAction.ITEM_UPDATED, f"{item.name}: {'; '.join(changes)}", performed_by)
            self._amended(OrderLogAction.ITEM_UPDATED)

    def remove_item(self, item_id, performed_by=None):
        item = self.item(item_id)

        self.log(
            OrderLogAction.ITEM_REMOVED,
            f'Removed "{item.name}" (Qty: {item.quantity}, Price: {format_eur(item.price)})',
            performed_by,
        )
        self.remove_items(item)
        self._recalculate_totals()
        self._touch()
        self._amended(OrderLogAction.ITEM_REMOVED)

    def add_item(self, product_id, name, price, quantity, image=None, performed_by=None):
        self.add_items(
            OrderItem(
                product_id=product_id,
                name=name,
                price=round_money(price),
                quantity=quantity,
                image=image,
                created_at=datetime.now(UTC),
            )
        )
        self.log(
            OrderLogAction.ITEM_ADDED,
            f'Added "{name}" (Qty: {quantity}, Price: {format_eur(price)})',
            performed_by,
        )
        self._recalculate_totals()
        self._touch()
        self._amended(OrderLogAction.ITEM_ADDED)

    def _amended(self, action: OrderLogAction):
        self.raise_(OrderAmended(order_id=str(self.id), action=action.value, total=self.total))


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id, limit: int = 1000) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(limit).all().items

    def newest_first(self, limit: int = 1000) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(limit).all().items

    def find_by_payment_intent(self, payment_intent_id: str) -> Order | None:
        return self._dao.query.filter(payment_intent_id=payment_intent_id).all().first

    def created_between(self, start, end, limit: int = 100000) -> list[Order]:
        return (
            self._dao.query.filter(created_at__gte=start, created_at__lt=end)
            .order_by("created_at")
            .limit(limit)
            .all()
            .items
        )
