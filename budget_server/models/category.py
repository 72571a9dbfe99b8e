"""
Category model for the budget server.

Categories are budget-scoped tags used to classify transactions.
"""

from sqlalchemy import Column, Integer, String, BigInteger, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from budget_server.models.base import Base


class Category(Base):
    """Category belonging to exactly one budget."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(255), nullable=True)
    amount = Column(BigInteger, nullable=False, default=0)  # planned amount, minor units
    expense = Column(Boolean, nullable=False, default=True)

    budget = relationship("Budget", lazy="selectin")

    def __repr__(self) -> str:
        """String representation of the Category model."""
        return f"<Category(id={self.id}, budget_id={self.budget_id}, title='{self.title}')>"
