"""
Security utilities for the application.
This module provides password hashing and verification and the random
identifiers used for login sessions.
"""
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional
from passlib.context import CryptContext
from budget_server.core.config import settings
from budget_server.core.logging import logger

# Password context for hashing and verification
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_ALPHABET = string.ascii_letters + string.digits


class PasswordManager:
    """Password management utilities."""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash.

        Args:
            plain_password: The plain text password
            hashed_password: The hashed password

        Returns:
            True if password matches hash, False otherwise
        """
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a plain text password with bcrypt."""
        return pwd_context.hash(password)


class SessionTokens:
    """Random tokens and expiry dates for login sessions."""

    @staticmethod
    def generate_token(length: Optional[int] = None) -> str:
        """
        Generate a random alphanumeric session token.

        Args:
            length: Token length, defaults to the configured session token length

        Returns:
            Random token
        """
        length = length or settings.security.session_token_length
        return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))

    @staticmethod
    def expiration_from(now: Optional[datetime] = None) -> datetime:
        """Expiry for a session created at ``now`` (defaults to the current time)."""
        now = now or datetime.now(timezone.utc)
        return now + timedelta(days=settings.security.session_expire_days)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return PasswordManager.verify_password(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return PasswordManager.get_password_hash(password)

def generate_session_token(length: Optional[int] = None) -> str:
    return SessionTokens.generate_token(length)

def session_expiration(now: Optional[datetime] = None) -> datetime:
    return SessionTokens.expiration_from(now)
