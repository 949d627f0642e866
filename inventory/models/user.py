"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String

from inventory.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'Administrator' or 'User'. email is stored as '' when not provided.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, default="")
    role = Column(String(32), nullable=False, default="User")
