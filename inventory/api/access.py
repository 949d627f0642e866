"""Access control dependencies: bearer-token authentication and role checks.

Routes pick one of three modes:
  Public          -- no dependency.
  Authenticated   -- Depends(get_current_user).
  RoleRequired    -- Depends(require_role(ROLE)); require_admin is the Administrator case.

Tokens are verified statelessly (signature, issuer, audience, expiry); the
database is not consulted.
"""

from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory.core.config import Settings, get_settings
from inventory.core.errors import ForbiddenError
from inventory.core.security import ROLE_ADMIN, decode_access_token
from inventory.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the identity in its claims. Raises 401 otherwise."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        return CurrentUser(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
            email=payload.get("email"),
        )
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


def require_role(role: str) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that requires an authenticated user whose role claim equals role (403 otherwise)."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise ForbiddenError(f"{role} access required")
        return current_user

    return dependency


require_admin = require_role(ROLE_ADMIN)
