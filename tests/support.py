"""Shared builders for tests: isolated in-memory databases, settings and an API client."""

from datetime import datetime
from types import SimpleNamespace

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.core.config import Settings, get_settings
from inventory.core.database import get_db, init_db
from inventory.core.security import ROLE_ADMIN, ROLE_USER, create_access_token
from inventory.main import app
from inventory.models import Base

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"
ADMIN_PASSWORD = "123456"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests; .env files are ignored."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "SEED_ADMIN_PASSWORD": ADMIN_PASSWORD,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory() -> sessionmaker:
    """
    Fresh in-memory database with all tables. StaticPool keeps a single
    connection so every session (and TestClient worker thread) sees the same data.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def token_for(
    settings: Settings,
    username: str = "tester",
    role: str = ROLE_USER,
    user_id: int = 99,
    email: str = "",
    now: datetime | None = None,
) -> str:
    """Sign a token for an identity that need not exist in the database."""
    user = SimpleNamespace(id=user_id, username=username, role=role, email=email)
    token, _ = create_access_token(user, settings, now=now)
    return token


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiHarness:
    """
    The real app wired to an isolated database and test settings through
    dependency overrides. The seed admin exists from the start.
    """

    def __init__(self, **settings_overrides: object) -> None:
        self.settings = make_settings(**settings_overrides)
        self.session_factory = make_session_factory()
        db = self.session_factory()
        try:
            init_db(db.get_bind(), db, self.settings)
        finally:
            db.close()

        def override_get_db():
            session: Session = self.session_factory()
            try:
                yield session
            finally:
                session.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app, raise_server_exceptions=True)

    def admin_token(self) -> str:
        return token_for(self.settings, username="admin", role=ROLE_ADMIN, user_id=1)

    def user_token(self) -> str:
        return token_for(self.settings, username="tester", role=ROLE_USER)

    def close(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
