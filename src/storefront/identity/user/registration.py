"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.security import hash_password
from storefront.identity.user.user import Role, User


@storefront.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=100)
    password: String(required=True, max_length=72)
    name: String(max_length=100)
    country: String(max_length=100)
    role: String(max_length=10, default=Role.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists with this email"]})

        user = User.register(
            email=command.email,
            password_hash=hash_password(command.password),
            name=command.name,
            country=command.country,
            role=command.role or Role.USER.value,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
