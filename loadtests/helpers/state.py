"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state with no cross-user
sharing. State tracks tokens and ids returned by earlier steps so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from sign-up to order."""

    token: str | None = None
    email: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_count: int = 0
    order_id: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class CheckoutState:
    """Tracks a hosted checkout from session to webhook."""

    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    session_id: str | None = None


@dataclass
class AdminState:
    """Tracks an administrator's catalogue and order work."""

    token: str | None = None
    category_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
