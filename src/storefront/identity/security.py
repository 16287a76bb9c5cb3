"""Password hashing (bcrypt) and bearer tokens (JWT, HS256)."""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt
from protean.exceptions import ValidationError

from storefront.domain import logger
from storefront.settings import get_settings

# bcrypt only reads the first 72 bytes and refuses longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes"]})
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def issue_token(user) -> str:
    """Sign a token carrying the user's id, email and role."""
    settings = get_settings()
    now = datetime.now(UTC)
    claims = {
        "userId": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict | None:
    """Return the token's claims, or None when it is malformed, forged or expired."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.info("token_rejected", reason=str(exc))
        return None
