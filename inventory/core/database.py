"""Database engine, session management and schema bootstrap."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inventory.core.config import Settings, settings
from inventory.core.security import ROLE_ADMIN, hash_password
from inventory.models import Base, User

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections may be shared across worker threads."""
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning("Database connectivity check failed: %s", e)
        return False


def seed_admin(db: Session, app_settings: Settings) -> bool:
    """Insert the seed administrator if no user has its username. Returns True if inserted."""
    username = app_settings.SEED_ADMIN_USERNAME
    existing = db.query(User).filter(User.username == username).first()
    if existing is not None:
        return False
    db.add(
        User(
            username=username,
            password_hash=hash_password(app_settings.SEED_ADMIN_PASSWORD.get_secret_value()),
            email=app_settings.SEED_ADMIN_EMAIL,
            role=ROLE_ADMIN,
        )
    )
    db.commit()
    logger.info("Seed administrator '%s' created", username)
    return True


def init_db(bind: Engine, db: Session, app_settings: Settings) -> None:
    """
    Create all tables and the seed administrator.

    Used for local runs and tests when AUTO_CREATE_SCHEMA is on; production
    schemas are managed by Alembic migrations.
    """
    Base.metadata.create_all(bind=bind)
    seed_admin(db, app_settings)
