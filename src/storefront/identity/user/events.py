"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new shopper account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String()
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String()


@storefront.event(part_of="User")
class UserRoleChanged:
    """An administrator promoted or demoted an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)


@storefront.event(part_of="User")
class AccountStatusChanged:
    """An administrator activated, deactivated or suspended an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
