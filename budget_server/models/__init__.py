"""
Models package initialization.

This module imports all models to ensure they are registered with SQLAlchemy.
"""

from budget_server.models.base import Base

from budget_server.models.user import User
from budget_server.models.budget import Budget
from budget_server.models.permission import Permission, PermissionLevel
from budget_server.models.category import Category
from budget_server.models.transaction import Transaction
from budget_server.models.session import UserSession


__all__ = [
    "Base",
    "User",
    "Budget",
    "Permission",
    "PermissionLevel",
    "Category",
    "Transaction",
    "UserSession",
]
