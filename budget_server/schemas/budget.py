"""
Pydantic schemas for budgets.

This module defines the request and response schemas for budget-related
API endpoints using Pydantic models.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field

from budget_server.models.permission import PermissionLevel
from budget_server.schemas.base import APIModel
from budget_server.schemas.user import UserSummary


class UserPermissionRequest(APIModel):
    """A user to share the budget with."""

    user_id: int
    permission: PermissionLevel = PermissionLevel.READ


class UserPermission(APIModel):
    """A user's access to a budget."""

    user: UserSummary
    permission: PermissionLevel


class BudgetCreate(APIModel):
    """Schema for creating a new budget."""

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=255)
    users: Optional[List[UserPermissionRequest]] = None


class BudgetUpdate(APIModel):
    """Schema for updating a budget. Only supplied fields change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=255)
    users: Optional[List[UserPermissionRequest]] = None


class Budget(APIModel):
    """Schema for budget response data."""

    id: int
    name: str
    description: Optional[str] = None
    users: List[UserPermission] = Field(
        default_factory=list,
        validation_alias=AliasChoices("permissions", "users"),
    )
