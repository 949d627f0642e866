"""SQLAlchemy declarative Base with constraint naming shared by models and Alembic."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Matches the op.f("ix_<table>_<column>") names used in the Alembic revisions.
NAMING_CONVENTION = {"ix": "ix_%(column_0_label)s"}


class Base(DeclarativeBase):
    """Declarative base for the users and products tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
