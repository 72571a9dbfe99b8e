"""
Pydantic schemas for users.

This module defines the request and response schemas for user-related
API endpoints using Pydantic models.
"""

from typing import Optional

from pydantic import Field, field_validator

from budget_server.core.config import settings
from budget_server.schemas.base import APIModel


class UserSummary(APIModel):
    """Short user reference embedded in other views."""

    id: int
    username: str


class UserCreate(APIModel):
    """Schema for registering a new user."""

    username: str = Field(min_length=1, max_length=50)
    password: str
    email: Optional[str] = Field(default=None, max_length=100)
    name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < settings.security.password_min_length:
            raise ValueError(
                f"Password must be at least {settings.security.password_min_length} characters"
            )
        return v


class User(UserSummary):
    """Schema for user response data."""

    email: Optional[str] = None
    name: Optional[str] = None
