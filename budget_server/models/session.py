"""
Session model for token based logins.

This module defines the SQLAlchemy model for user sessions.
"""

import secrets

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from budget_server.models.base import Base


def random_id() -> str:
    return secrets.token_hex(16)


class UserSession(Base):
    """
    User session created on login.

    The token is sent back as ``Authorization: Bearer <token>`` until the
    session expires or is deleted on logout.
    """

    __tablename__ = "user_sessions"

    id = Column(String(32), primary_key=True, default=random_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(255), nullable=False, unique=True, index=True)
    expiration = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        """String representation of the UserSession model."""
        return f"<UserSession(id={self.id}, user_id={self.user_id}, token={self.token[:10]}...)>"
