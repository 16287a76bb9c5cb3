"""Pydantic request/response schemas for accounts and favourites."""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.identity.user.user import User


# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "name": "Jane Doe",
                    "country": "Portugal",
                }
            ]
        }
    }

    email: str = Field(..., max_length=100)
    password: str = Field(..., min_length=1, max_length=72)
    name: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=100)
    password: str = Field(..., max_length=128)


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)


class UpdateRoleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"role": "admin"}]}}

    role: str = Field(..., max_length=10)


class UpdateAccountStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"account_status": "suspended"}]}}

    account_status: str = Field(..., max_length=10)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    country: str | None = None
    role: str
    account_status: str
    last_login: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            country=user.country,
            role=user.role.lower(),
            account_status=user.account_status.lower(),
            last_login=user.last_login,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class DeletedResponse(BaseModel):
    deleted: bool


class FavoriteToggleResponse(BaseModel):
    product_id: str
    favorite: bool


class FavoritesResponse(BaseModel):
    product_ids: list[str]
