"""
Transaction model for the budget server.

This module defines the SQLAlchemy model for transactions,
the dated expense or income records kept inside a budget.
"""

from sqlalchemy import Column, Integer, String, BigInteger, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from budget_server.models.base import Base, utcnow


class Transaction(Base):
    """
    Transaction model representing a single expense or income.

    The category, when set, must belong to the same budget as the
    transaction. Amounts are signed integers in minor currency units.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    expense = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # Relationships are loaded eagerly so the response view never lazy loads
    budget = relationship("Budget", lazy="selectin")
    category = relationship("Category", lazy="selectin")
    created_by = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        """String representation of the Transaction model."""
        return (
            f"<Transaction(id={self.id}, "
            f"budget_id={self.budget_id}, "
            f"category_id={self.category_id}, "
            f"amount={self.amount})>"
        )
