"""
Service layer for user operations.

This module contains the business logic for user-related operations,
abstracting away the database operations from the API endpoints.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from budget_server.core.security import verify_password, get_password_hash
from budget_server.core.logging import logger
from budget_server.models.user import User
from budget_server.schemas.user import UserCreate


class UserService:
    """Service class for user operations."""

    @staticmethod
    async def create(db: AsyncSession, user_in: UserCreate) -> User:
        """
        Create a new user with a hashed password.

        Args:
            db: Database session
            user_in: User creation data

        Returns:
            Created user

        Raises:
            ValueError: If the username is already taken
        """
        logger.info(f"Creating new user: {user_in.username}")

        if await UserService.get_by_username(db, user_in.username):
            logger.warning(f"Username already taken: {user_in.username}")
            raise ValueError("Username already taken")

        user_data = user_in.model_dump()
        password = user_data.pop("password")
        user = User(**user_data)
        user.hashed_password = get_password_hash(password)
        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user with ID: {user.id}")
        return user

    @staticmethod
    async def authenticate(
        db: AsyncSession,
        username: str,
        password: str
    ) -> Optional[User]:
        """
        Check a username and password.

        Args:
            db: Database session
            username: Username
            password: Plain text password

        Returns:
            The user if the credentials match, None otherwise
        """
        user = await UserService.get_by_username(db, username)
        if not user:
            logger.debug(f"Authentication failed, unknown user: {username}")
            return None
        if not verify_password(password, user.hashed_password):
            logger.debug(f"Authentication failed, wrong password for: {username}")
            return None
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalars().first()
