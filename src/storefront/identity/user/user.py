"""User aggregate: shopper and administrator accounts."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.user.events import (
    AccountStatusChanged,
    UserLoggedIn,
    UserProfileUpdated,
    UserRegistered,
    UserRoleChanged,
)
from storefront.shared.email import is_valid_email, normalize_email


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class AccountStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


@storefront.aggregate
class User:
    """A registered account.

    Emails are stored lower-cased and are unique across accounts; uniqueness
    is checked by the command handlers against the repository. Suspended
    accounts cannot sign in.
    """

    email: String(required=True, max_length=100)
    password_hash: String(required=True, max_length=255)
    name: String(max_length=100)
    country: String(max_length=100)
    role: String(choices=Role, default=Role.USER.value)
    account_status: String(choices=AccountStatus, default=AccountStatus.ACTIVE.value)
    last_login: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, email, password_hash, name=None, country=None, role=Role.USER.value):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            name=name,
            country=country,
            role=role,
            account_status=AccountStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                name=user.name,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_suspended(self) -> bool:
        return self.account_status == AccountStatus.SUSPENDED.value

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login = now
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=now))

    def update_profile(self, name=None, email=None, country=None):
        if name is not None:
            self.name = name
        if country is not None:
            self.country = country
        if email is not None:
            self.email = normalize_email(email)
        self.updated_at = datetime.now(UTC)

        self.raise_(UserProfileUpdated(user_id=self.id, email=self.email, name=self.name))

    def change_role(self, role: Role):
        previous_role = self.role
        self.role = role.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            UserRoleChanged(
                user_id=self.id,
                previous_role=previous_role,
                new_role=self.role,
            )
        )

    def change_account_status(self, status: AccountStatus):
        previous_status = self.account_status
        self.account_status = status.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            AccountStatusChanged(
                user_id=self.id,
                previous_status=previous_status,
                new_status=self.account_status,
            )
        )


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def newest_first(self, limit: int = 1000) -> list[User]:
        return self._dao.query.order_by("-created_at").limit(limit).all().items

    def count_customers_created_between(self, start, end) -> int:
        return (
            self._dao.query.filter(
                role=Role.USER.value,
                created_at__gte=start,
                created_at__lt=end,
            )
            .all()
            .total
        )
