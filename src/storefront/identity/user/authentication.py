"""Sign-in: verifies credentials and stamps the last login time."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.security import verify_password
from storefront.identity.user.user import User

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_SUSPENDED = "Your account has been suspended. Please contact support for assistance."


@storefront.command(part_of="User")
class AuthenticateUser:
    email: String(required=True, max_length=100)
    password: String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class AuthenticateUserHandler:
    @handle(AuthenticateUser)
    def authenticate(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)

        if user is None or not verify_password(command.password, user.password_hash):
            logger.info("login_failed", reason="invalid_credentials")
            raise ValidationError({"credentials": [INVALID_CREDENTIALS]})

        if user.is_suspended:
            logger.info("login_failed", user_id=str(user.id), reason="suspended")
            raise ValidationError({"account_status": [ACCOUNT_SUSPENDED]})

        user.record_login()
        repo.add(user)
        return str(user.id)
