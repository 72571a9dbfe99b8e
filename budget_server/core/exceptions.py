"""
Application error types.

Every error carries the HTTP status it maps to and a human readable message.
The exception handler registered in ``budget_server.main`` renders them as
``{"message": ...}``.
"""

from typing import Dict, Optional

from fastapi import status


class BudgetServerError(Exception):
    """Base class for errors that are turned into HTTP responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class NotFoundError(BudgetServerError):
    """Resource is missing or not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidRequestError(BudgetServerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ForbiddenError(BudgetServerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not enough permissions"


class UnauthenticatedError(BudgetServerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": 'Basic realm="budget-server", Bearer'})
