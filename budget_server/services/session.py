"""
Service layer for login sessions.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from budget_server.core.logging import logger
from budget_server.core.security import generate_session_token, session_expiration
from budget_server.models.session import UserSession
from budget_server.models.user import User
from budget_server.utils.dates import as_utc


class SessionService:
    """Service class for session operations."""

    @staticmethod
    async def create(db: AsyncSession, user: User) -> UserSession:
        """
        Start a new session for a user.

        Expired sessions of the same user are removed first.

        Args:
            db: Database session
            user: Authenticated user

        Returns:
            The new session, carrying its token
        """
        await SessionService.purge_expired(db, user)
        session = UserSession(
            user=user,
            token=generate_session_token(),
            expiration=session_expiration(),
        )
        db.add(session)
        await db.flush()
        await db.refresh(session)
        logger.info(f"Created session {session.id} for user {user.id}")
        return session

    @staticmethod
    async def get_by_token(db: AsyncSession, token: str) -> Optional[UserSession]:
        """
        Look up a session by token.

        Returns:
            The session if it exists and has not expired, None otherwise
        """
        result = await db.execute(select(UserSession).where(UserSession.token == token))
        session = result.scalars().first()
        if session is None:
            return None
        if as_utc(session.expiration) <= datetime.now(timezone.utc):
            logger.info(f"Session {session.id} expired")
            return None
        return session

    @staticmethod
    async def delete(db: AsyncSession, session: UserSession) -> None:
        session_id = session.id
        await db.delete(session)
        await db.flush()
        logger.info(f"Deleted session {session_id}")

    @staticmethod
    async def purge_expired(db: AsyncSession, user: User) -> None:
        await db.execute(
            delete(UserSession).where(
                UserSession.user_id == user.id,
                UserSession.expiration <= datetime.now(timezone.utc),
            ).execution_options(synchronize_session=False)
        )
