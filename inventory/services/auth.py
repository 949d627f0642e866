"""Auth service: login, registration and user queries over the users table."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from inventory.core.security import (
    ROLE_ADMIN,
    ROLE_USER,
    create_access_token,
    hash_password,
    verify_password,
)
from inventory.models import User
from inventory.repositories import Repository

if TYPE_CHECKING:
    from inventory.core.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_ROLES = frozenset({ROLE_ADMIN, ROLE_USER})


class LoginResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    token: str
    expiration: datetime
    user: User


class AuthService:
    """Credential checks and account management. Passwords are only ever stored as bcrypt hashes."""

    def __init__(self, db: Session, settings: "Settings") -> None:
        self.users: Repository[User] = Repository(db, User)
        self.settings = settings

    def login(self, username: str, password: str) -> LoginResult:
        """
        Verify credentials and issue a token.

        Unknown username and wrong password fail identically so callers cannot
        tell which one was wrong.
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required")

        user = self.users.find_by_field("username", username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentialsError()

        token, expiration = create_access_token(user, self.settings)
        logger.info("Login succeeded for username=%s", username)
        return LoginResult(token=token, expiration=expiration, user=user)

    def register(
        self,
        username: str,
        password: str,
        email: str | None = None,
        role: str | None = None,
    ) -> User:
        """Create an account; role defaults to 'User' and email to ''."""
        if not username or not username.strip() or not password:
            raise InvalidInputError("Username and password are required")
        min_len = self.settings.PASSWORD_MIN_LENGTH
        if len(password) < min_len:
            raise InvalidInputError(f"Password must be at least {min_len} characters")
        role = role or ROLE_USER
        if role not in ALLOWED_ROLES:
            raise InvalidInputError(
                f"Role must be one of: {', '.join(sorted(ALLOWED_ROLES))}"
            )
        if self.users.find_by_field("username", username) is not None:
            raise ConflictError("Username already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            email=email or "",
            role=role,
        )
        try:
            user = self.users.insert(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same username.
            self.users.session.rollback()
            raise ConflictError("Username already exists") from e
        logger.info("Registered user id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def list_users(self) -> list[User]:
        return self.users.query().order_by(User.id).all()

    def profile(self, username: str | None) -> User:
        """Stored record for the authenticated username."""
        if not username:
            raise UnauthenticatedError("User not authenticated")
        user = self.users.find_by_field("username", username)
        if user is None:
            raise NotFoundError("User not found")
        return user
