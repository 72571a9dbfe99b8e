"""
Shared Pydantic configuration for request and response schemas.

Payloads use camelCase keys on the wire (``budgetId``, ``createdBy``) while
the Python side keeps snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(APIModel):
    """Body returned for every handled error."""

    message: str
