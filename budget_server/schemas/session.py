"""
Pydantic schemas for login sessions.
"""

from datetime import datetime

from pydantic import field_validator

from budget_server.schemas.base import APIModel
from budget_server.utils.dates import as_utc


class Session(APIModel):
    """Schema for session response data."""

    id: str
    token: str
    expiration: datetime

    @field_validator("expiration")
    @classmethod
    def expiration_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
