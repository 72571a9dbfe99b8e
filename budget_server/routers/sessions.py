"""
Session management endpoints.
This module provides token login and logout.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.auth import get_current_active_user, get_current_session
from budget_server.core.exceptions import InvalidRequestError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.session import UserSession
from budget_server.models.user import User
from budget_server.schemas.base import ErrorResponse
from budget_server.schemas.session import Session
from budget_server.services.session import SessionService

router = APIRouter()


@router.post("/login", response_model=Session)
async def login(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Session:
    """
    Create a session for the authenticated user.

    The returned token can be sent as ``Authorization: Bearer <token>``
    instead of Basic credentials until the session expires.

    Args:
        db: Database session
        current_user: User authenticated by HTTP Basic credentials

    Returns:
        The new session
    """
    session = await SessionService.create(db, current_user)
    logger.info(f"User {current_user.username} logged in, session {session.id}")
    return session


@router.delete("/logout", responses={400: {"model": ErrorResponse}})
async def logout(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    session: Optional[UserSession] = Depends(get_current_session)
) -> Response:
    """
    Delete the session whose token authenticated this request.

    Raises:
        InvalidRequestError: If the request was not authenticated with a session token
    """
    if session is None:
        raise InvalidRequestError("Logout requires a session token")
    await SessionService.delete(db, session)
    logger.info(f"User {current_user.username} logged out")
    return Response(status_code=status.HTTP_200_OK)
