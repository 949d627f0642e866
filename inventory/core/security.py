"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from inventory.core.config import Settings
    from inventory.models.user import User

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

ROLE_ADMIN = "Administrator"
ROLE_USER = "User"

USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128

# Claims every token issued here carries; decoding rejects tokens without them.
REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud", "sub", "username", "role"]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user: "User",
    settings: "Settings",
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """
    Create a signed JWT for a user; returns (token, expires_at).

    Claims: sub (user id), username, role, email (only when set), iss, aud, iat, exp.
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": expires_at,
    }
    if user.email:
        payload["email"] = user.email
    token = jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    return token, expires_at


def decode_access_token(token: str, settings: "Settings") -> dict[str, Any]:
    """
    Decode and validate JWT; return its claims.
    Raises jwt.PyJWTError on bad signature, wrong issuer/audience, missing claims or expiry.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        options={"require": REQUIRED_CLAIMS},
    )
