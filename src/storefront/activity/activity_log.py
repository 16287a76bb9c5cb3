"""ActivityLog aggregate: an audit trail of shopper and admin actions."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront

MAX_IP_LENGTH = 64
MAX_USER_AGENT_LENGTH = 512


class ActivityAction(Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    REGISTER = "REGISTER"
    LOGIN_FAILED = "LOGIN_FAILED"
    VIEW_PAGE = "VIEW_PAGE"
    VIEW_PRODUCT = "VIEW_PRODUCT"
    ADD_TO_CART = "ADD_TO_CART"
    REMOVE_FROM_CART = "REMOVE_FROM_CART"
    UPDATE_CART = "UPDATE_CART"
    CLEAR_CART = "CLEAR_CART"
    ADD_TO_WISHLIST = "ADD_TO_WISHLIST"
    REMOVE_FROM_WISHLIST = "REMOVE_FROM_WISHLIST"
    PLACE_ORDER = "PLACE_ORDER"
    UPDATE_PROFILE = "UPDATE_PROFILE"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    SEARCH = "SEARCH"
    FILTER_PRODUCTS = "FILTER_PRODUCTS"
    CHECKOUT_STARTED = "CHECKOUT_STARTED"
    CHECKOUT_COMPLETED = "CHECKOUT_COMPLETED"
    CHECKOUT_CANCELLED = "CHECKOUT_CANCELLED"
    ADMIN_ACTION = "ADMIN_ACTION"
    OTHER = "OTHER"


@storefront.aggregate
class ActivityLog:
    """One recorded action. Anonymous visitors are logged without a user id.

    ``extra_data`` holds the caller-supplied metadata as a JSON object.
    """

    user_id: Identifier()
    action: String(required=True, choices=ActivityAction)
    description: Text(required=True)
    ip_address: String(max_length=MAX_IP_LENGTH)
    user_agent: String(max_length=MAX_USER_AGENT_LENGTH)
    path: String(max_length=512)
    extra_data: Text()
    created_at: DateTime()

    @classmethod
    def record(cls, action, description, user_id=None, ip_address=None, user_agent=None, path=None, metadata=None):
        return cls(
            user_id=user_id,
            action=action,
            description=description,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:MAX_USER_AGENT_LENGTH] or None,
            path=path,
            extra_data=json.dumps(metadata) if metadata is not None else None,
            created_at=datetime.now(UTC),
        )

    @property
    def metadata(self) -> dict | None:
        return json.loads(self.extra_data) if self.extra_data else None
