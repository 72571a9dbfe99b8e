"""
User API endpoints.
This module provides registration and the current-user lookup.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.auth import get_current_active_user
from budget_server.core.exceptions import InvalidRequestError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.user import User as UserModel
from budget_server.schemas.base import ErrorResponse
from budget_server.schemas.user import User, UserCreate
from budget_server.services.user import UserService

router = APIRouter()


@router.post("/new", response_model=User, responses={400: {"model": ErrorResponse}})
async def register_user(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Register a new user.

    Args:
        user_in: Username, password and optional profile fields
        db: Database session

    Returns:
        Created user

    Raises:
        InvalidRequestError: If the username is already taken
    """
    try:
        user = await UserService.create(db, user_in)
    except ValueError as e:
        logger.warning(f"User registration failed: {str(e)}")
        raise InvalidRequestError(str(e))
    logger.info(f"User registered successfully: {user.id}")
    return user


@router.get("/me", response_model=User)
async def get_me(current_user: UserModel = Depends(get_current_active_user)) -> User:
    """Get the current authenticated user."""
    return current_user
