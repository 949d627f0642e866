"""SQLAlchemy ORM models."""

from inventory.models.base import Base
from inventory.models.product import Product
from inventory.models.user import User

__all__ = ["Base", "Product", "User"]
