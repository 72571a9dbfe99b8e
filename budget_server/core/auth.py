"""
Authentication utilities for FastAPI.

Callers authenticate with HTTP Basic credentials or with the bearer token of
a session created at login. Endpoints depending on ``get_current_user`` never
run without an authenticated, active user.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials, HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.exceptions import UnauthenticatedError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.session import UserSession
from budget_server.models.user import User
from budget_server.services.session import SessionService
from budget_server.services.user import UserService

basic_scheme = HTTPBasic(auto_error=False, realm="budget-server")
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_session(
    db: AsyncSession = Depends(get_db),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[UserSession]:
    """
    Get the session matching the request's bearer token.

    Returns:
        The live session, or None when no bearer token was sent

    Raises:
        UnauthenticatedError: If a token was sent but is unknown or expired
    """
    if bearer is None:
        return None
    session = await SessionService.get_by_token(db, bearer.credentials)
    if session is None:
        logger.warning("Rejected unknown or expired session token")
        raise UnauthenticatedError("Invalid or expired session")
    return session


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    basic: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    session: Optional[UserSession] = Depends(get_current_session)
) -> User:
    """
    Get the current authenticated user.

    Args:
        request: Incoming request, the user ID is stored on its state
        db: Database session
        basic: HTTP Basic credentials, if sent
        session: Session resolved from a bearer token, if sent

    Returns:
        Current user

    Raises:
        UnauthenticatedError: If authentication fails
    """
    user: Optional[User] = None
    if session is not None:
        user = session.user
    elif basic is not None:
        user = await UserService.authenticate(db, basic.username, basic.password)
        if user is None:
            logger.warning(f"Invalid credentials for user: {basic.username}")
            raise UnauthenticatedError("Invalid username or password")

    if user is None:
        raise UnauthenticatedError("Authentication required")

    request.state.user_id = user.id
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get the current active user.

    Raises:
        UnauthenticatedError: If the user is inactive
    """
    if not current_user.is_active:
        logger.warning(f"Inactive user attempted access: {current_user.username}")
        raise UnauthenticatedError("Inactive user")
    return current_user
