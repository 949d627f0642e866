"""Pydantic request/response schemas."""

from inventory.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserView,
)
from inventory.schemas.common import ApiResponse, CamelModel, Page
from inventory.schemas.health import HealthResponse
from inventory.schemas.product import DeletedProduct, ProductView, ProductWrite

__all__ = [
    "ApiResponse",
    "CamelModel",
    "CurrentUser",
    "DeletedProduct",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "Page",
    "ProductView",
    "ProductWrite",
    "RegisterRequest",
    "UserView",
]
