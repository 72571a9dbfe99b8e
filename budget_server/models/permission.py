"""
Permission model linking users to budgets.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from budget_server.models.base import Base


class PermissionLevel(str, PyEnum):
    """Access levels, ordered from weakest to strongest."""

    READ = "READ"
    WRITE = "WRITE"
    MANAGE = "MANAGE"
    OWNER = "OWNER"

    @property
    def rank(self) -> int:
        return list(PermissionLevel).index(self)

    def allows(self, required: "PermissionLevel") -> bool:
        return self.rank >= required.rank


class Permission(Base):
    """
    Grant of access linking a user to a budget.

    Any level gives visibility of the budget and lets the user record,
    change and delete its transactions and categories.
    """

    __tablename__ = "user_permissions"
    __table_args__ = (UniqueConstraint("user_id", "budget_id", name="uq_user_permissions_user_budget"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False, index=True)
    permission = Column(Enum(PermissionLevel), nullable=False, default=PermissionLevel.READ)

    user = relationship("User", lazy="selectin")
    budget = relationship("Budget", back_populates="permissions", lazy="selectin")

    def __repr__(self) -> str:
        """String representation of the Permission model."""
        return (
            f"<Permission(user_id={self.user_id}, "
            f"budget_id={self.budget_id}, "
            f"permission='{self.permission.value if self.permission else 'N/A'}')>"
        )
