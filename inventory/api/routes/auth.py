"""Auth endpoints: login, registration, user listing (admin) and profile."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory.api.access import get_current_user, require_admin
from inventory.core.config import Settings, get_settings
from inventory.core.database import get_db
from inventory.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserView,
)
from inventory.schemas.common import ApiResponse
from inventory.services.auth import AuthService

router = APIRouter()


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(db, settings)


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[LoginResponse]:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.username, body.password)
    payload = LoginResponse(
        token=result.token,
        expiration=result.expiration,
        user=UserView.model_validate(result.user),
    )
    return ApiResponse[LoginResponse].ok(payload, "Login successful")


@router.post("/register", response_model=ApiResponse[UserView])
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[UserView]:
    """Create a user account. Role defaults to 'User'."""
    user = service.register(body.username, body.password, body.email, body.role)
    return ApiResponse[UserView].ok(UserView.model_validate(user), "User registered successfully")


@router.get("/users", response_model=ApiResponse[list[UserView]])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[list[UserView]]:
    """List all users (Administrator only)."""
    users = [UserView.model_validate(u) for u in service.list_users()]
    return ApiResponse[list[UserView]].ok(users, "Users retrieved successfully")


@router.get("/profile", response_model=ApiResponse[UserView])
def profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[UserView]:
    """Return the stored record of the authenticated user."""
    user = service.profile(current_user.username)
    return ApiResponse[UserView].ok(UserView.model_validate(user))
