"""Account administration: roles, account status and deletion."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user.user import AccountStatus, Role, User


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id: Identifier(required=True)
    role: String(required=True, max_length=10)


@storefront.command(part_of="User")
class ChangeAccountStatus:
    user_id: Identifier(required=True)
    account_status: String(required=True, max_length=10)


@storefront.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)
    requested_by: Identifier(required=True)


def _parse(enum_cls, value, field, message):
    try:
        return enum_cls((value or "").strip().upper())
    except ValueError:
        raise ValidationError({field: [message]})


@storefront.command_handler(part_of=User)
class AdministerUserHandler:
    @handle(ChangeUserRole)
    def change_role(self, command):
        role = _parse(Role, command.role, "role", "Invalid role. Must be USER or ADMIN")

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(role)
        repo.add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=user.role)

    @handle(ChangeAccountStatus)
    def change_account_status(self, command):
        status = _parse(
            AccountStatus,
            command.account_status,
            "account_status",
            "Invalid status. Must be ACTIVE, INACTIVE, or SUSPENDED",
        )

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_account_status(status)
        repo.add(user)
        logger.info("account_status_changed", user_id=str(user.id), status=user.account_status)

    @handle(DeleteUser)
    def delete_user(self, command):
        from storefront.identity.favorite.favorite import UserFavorite
        from storefront.ordering.cart.cart import ShoppingCart

        if str(command.user_id) == str(command.requested_by):
            raise ValidationError({"user_id": ["You cannot delete your own account"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        cart = current_domain.repository_for(ShoppingCart).find_for_user(user.id)
        if cart is not None:
            current_domain.repository_for(ShoppingCart)._dao.delete(cart)

        favorites_repo = current_domain.repository_for(UserFavorite)
        for favorite in favorites_repo.for_user(user.id):
            favorites_repo._dao.delete(favorite)

        repo._dao.delete(user)
        logger.info("user_deleted", user_id=str(user.id), deleted_by=str(command.requested_by))
        return True
