"""
User model for authentication and authorization.
This module defines the SQLAlchemy model for users who own and share budgets.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from budget_server.models.base import Base, utcnow
from budget_server.core.security import get_password_hash


class User(Base):
    """
    User model representing system users.

    Users see budgets through Permission records and authenticate with
    HTTP Basic credentials or a session token.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=True)
    name = Column(String(100), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        """String representation of the User model."""
        return f"<User(id={self.id}, username='{self.username}')>"

    def set_password(self, password: str) -> None:
        """Set the user's password."""
        self.hashed_password = get_password_hash(password)
