"""Self-service profile updates."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User


@storefront.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=100)
    country: String(max_length=100)


@storefront.command_handler(part_of=User)
class UpdateUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email:
            other = repo.find_by_email(command.email)
            if other is not None and str(other.id) != str(user.id):
                raise ValidationError({"email": ["Email is already taken"]})

        user.update_profile(name=command.name, email=command.email or None, country=command.country)
        repo.add(user)
