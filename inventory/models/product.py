"""ORM model for inventory products."""

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from inventory.models.base import Base


class Product(Base):
    """
    Product record managed through the products API.

    created_at is assigned by the service on create and never changed afterwards.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
