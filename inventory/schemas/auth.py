"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from inventory.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN
from inventory.schemas.common import CamelModel


class LoginRequest(BaseModel):
    """Credentials for login. Emptiness is checked by the auth service."""

    username: str = Field(default="", max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(default="", max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(BaseModel):
    """New account details. Role defaults to 'User' when omitted."""

    username: str = Field(default="", max_length=USERNAME_MAX_LEN, description="Unique username")
    password: str = Field(default="", max_length=PASSWORD_MAX_LEN, description="Password (at least 6 characters)")
    email: str | None = Field(default=None, max_length=255, description="Email address")
    role: str | None = Field(default=None, max_length=32, description="User or Administrator")


class UserView(CamelModel):
    """User as exposed by the API (no password)."""

    id: int
    username: str
    email: str
    role: str


class LoginResponse(CamelModel):
    """JWT issued by a successful login plus the authenticated user."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    expiration: datetime = Field(..., description="Token expiry (UTC)")
    user: UserView


class CurrentUser(BaseModel):
    """Identity taken from a verified token's claims, injected by the access-control dependencies."""

    id: int
    username: str
    role: str
    email: str | None = None
