"""
Pydantic schemas for categories.

This module defines the request and response schemas for category-related
API endpoints using Pydantic models.
"""

from typing import Optional

from pydantic import Field

from budget_server.schemas.base import APIModel


class CategorySummary(APIModel):
    """Short category reference embedded in transaction views."""

    id: int
    title: str


class CategoryCreate(APIModel):
    """Schema for creating a new category."""

    budget_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=255)
    amount: int = 0
    expense: bool = True


class CategoryUpdate(APIModel):
    """Schema for updating a category. Only supplied fields change."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=255)
    amount: Optional[int] = None
    expense: Optional[bool] = None


class Category(CategorySummary):
    """Schema for category response data."""

    budget_id: int
    description: Optional[str] = None
    amount: int
    expense: bool
