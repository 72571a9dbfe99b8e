"""
Services package initialization.

This module imports all services to make them available from a single import point.
"""

from budget_server.services.permission import PermissionService
from budget_server.services.category import CategoryService
from budget_server.services.transaction import TransactionService
from budget_server.services.user import UserService
from budget_server.services.budget import BudgetService
from budget_server.services.session import SessionService

__all__ = [
    "PermissionService",
    "CategoryService",
    "TransactionService",
    "UserService",
    "BudgetService",
    "SessionService",
]
