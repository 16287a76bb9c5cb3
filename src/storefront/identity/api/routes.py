"""FastAPI endpoints for accounts, account administration and favourites."""

from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.identity.api.deps import admin_user, current_user
from storefront.identity.api.schemas import (
    AuthResponse,
    DeletedResponse,
    FavoritesResponse,
    FavoriteToggleResponse,
    LoginRequest,
    RegisterRequest,
    UpdateAccountStatusRequest,
    UpdateRoleRequest,
    UpdateUserRequest,
    UserResponse,
)
from storefront.identity.favorite.toggling import ToggleFavorite, user_favorites
from storefront.identity.security import issue_token
from storefront.identity.user.administration import ChangeAccountStatus, ChangeUserRole, DeleteUser
from storefront.identity.user.authentication import AuthenticateUser
from storefront.identity.user.profile import UpdateUser
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import User
from storefront.shared.errors import error_message


def _auth_response(user_id: str) -> AuthResponse:
    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(token=issue_token(user), user=UserResponse.from_user(user))


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    user_id = current_domain.process(
        RegisterUser(email=body.email, password=body.password, name=body.name, country=body.country),
        asynchronous=False,
    )
    return _auth_response(user_id)


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    try:
        user_id = current_domain.process(
            AuthenticateUser(email=body.email, password=body.password),
            asynchronous=False,
        )
    except ValidationError as exc:
        status_code = 403 if "account_status" in exc.messages else 401
        raise HTTPException(status_code=status_code, detail=error_message(exc))
    return _auth_response(user_id)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(current_user)) -> UserResponse:
    return UserResponse.from_user(user)


@user_router.put("/me", response_model=AuthResponse)
async def update_me(body: UpdateUserRequest, user: User = Depends(current_user)) -> AuthResponse:
    """Update the caller's name or email; a fresh token carries the new email."""
    current_domain.process(
        UpdateUser(user_id=str(user.id), name=body.name, email=body.email, country=body.country),
        asynchronous=False,
    )
    return _auth_response(str(user.id))


@user_router.get("", response_model=list[UserResponse])
async def list_users(_: User = Depends(admin_user)) -> list[UserResponse]:
    users = current_domain.repository_for(User).newest_first()
    return [UserResponse.from_user(user) for user in users]


@user_router.put("/{user_id}/role", response_model=UserResponse)
async def update_role(user_id: str, body: UpdateRoleRequest, _: User = Depends(admin_user)) -> UserResponse:
    current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return UserResponse.from_user(current_domain.repository_for(User).get(user_id))


@user_router.put("/{user_id}/status", response_model=UserResponse)
async def update_account_status(
    user_id: str, body: UpdateAccountStatusRequest, _: User = Depends(admin_user)
) -> UserResponse:
    current_domain.process(
        ChangeAccountStatus(user_id=user_id, account_status=body.account_status),
        asynchronous=False,
    )
    return UserResponse.from_user(current_domain.repository_for(User).get(user_id))


@user_router.delete("/{user_id}", response_model=DeletedResponse)
async def delete_user(user_id: str, admin: User = Depends(admin_user)) -> DeletedResponse:
    deleted = current_domain.process(
        DeleteUser(user_id=user_id, requested_by=str(admin.id)),
        asynchronous=False,
    )
    return DeletedResponse(deleted=deleted)


# ---------------------------------------------------------------------------
# Favourites
# ---------------------------------------------------------------------------
favorite_router = APIRouter(prefix="/favorites", tags=["favorites"])


@favorite_router.get("", response_model=FavoritesResponse)
async def list_favorites(user: User = Depends(current_user)) -> FavoritesResponse:
    return FavoritesResponse(product_ids=user_favorites(user.id))


@favorite_router.post("/{product_id}/toggle", response_model=FavoriteToggleResponse)
async def toggle_favorite(product_id: str, user: User = Depends(current_user)) -> FavoriteToggleResponse:
    favorite = current_domain.process(
        ToggleFavorite(user_id=str(user.id), product_id=product_id),
        asynchronous=False,
    )
    return FavoriteToggleResponse(product_id=product_id, favorite=favorite)
