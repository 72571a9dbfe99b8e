"""
Budget model for the budget server.

This module defines the SQLAlchemy model for budgets, the scope that owns
categories and transactions and is shared between users.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from budget_server.models.base import Base, utcnow


class Budget(Base):
    """
    Budget model representing a shared set of categories and transactions.

    Access is granted per user through Permission records; the budget
    itself stores no owner column.
    """

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Loaded explicitly by the budget service
    permissions = relationship("Permission", back_populates="budget", lazy="select")

    def __repr__(self) -> str:
        """String representation of the Budget model."""
        return f"<Budget(id={self.id}, name='{self.name}')>"
