"""
Pydantic schemas for transactions.

This module defines the request and response schemas for transaction-related
API endpoints using Pydantic models.
"""

from typing import Optional
from datetime import datetime

from pydantic import Field, field_validator

from budget_server.schemas.base import APIModel
from budget_server.schemas.category import CategorySummary
from budget_server.schemas.user import UserSummary
from budget_server.utils.dates import as_utc


class TransactionCreate(APIModel):
    """Schema for creating a new transaction."""

    budget_id: int
    category_id: Optional[int] = None
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1024)
    date: datetime
    amount: int
    expense: bool


class TransactionUpdate(APIModel):
    """
    Schema for updating a transaction.

    Fields left out of the request body are not touched. ``description`` may
    be cleared with an explicit null; a null for any other field is treated
    as if the field was left out.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1024)
    date: Optional[datetime] = None
    amount: Optional[int] = None
    expense: Optional[bool] = None
    budget_id: Optional[int] = None
    category_id: Optional[int] = None


class Transaction(APIModel):
    """Schema for transaction response data."""

    id: int
    title: str
    description: Optional[str] = None
    date: datetime
    amount: int
    expense: bool
    category: Optional[CategorySummary] = None
    budget_id: int
    created_by: UserSummary

    @field_validator("date")
    @classmethod
    def date_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
