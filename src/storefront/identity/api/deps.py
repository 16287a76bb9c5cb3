"""Bearer-token dependencies shared by every router."""

from fastapi import Depends, Header, HTTPException
from protean.utils.globals import current_domain

from storefront.identity.security import decode_token
from storefront.identity.user.user import User


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def optional_user(authorization: str | None = Header(default=None)) -> User | None:
    """The signed-in user, or None for anonymous callers and unusable tokens."""
    token = _bearer_token(authorization)
    if token is None:
        return None

    claims = decode_token(token)
    if not claims or not claims.get("userId"):
        return None

    return current_domain.repository_for(User)._dao.query.filter(id=claims["userId"]).all().first


async def current_user(user: User | None = Depends(optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


async def admin_user(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Unauthorized - Admin access required")
    return user
