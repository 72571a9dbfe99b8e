"""
Configuration for pytest.

This module provides fixtures and configuration for running tests against a
throwaway SQLite database.
"""

import os

os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from budget_server.db import session as session_module
from budget_server.main import app
from budget_server.models import Base, Budget, Category, PermissionLevel, Transaction, User
from budget_server.schemas.user import UserCreate
from budget_server.services.permission import PermissionService
from budget_server.services.user import UserService

ALICE_AUTH = ("alice", "alice-password")
BOB_AUTH = ("bob", "bob-password")


@pytest.fixture
async def test_engine(tmp_path):
    """Create a fresh database file with all tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        future=True,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine, monkeypatch):
    """Session factory bound to the test database, also used by ``get_db``."""
    factory = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(session_module, "AsyncSessionLocal", factory)
    return factory


@pytest.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory):
    """Create an async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def create_user(db: AsyncSession, username: str, password: str) -> User:
    user = await UserService.create(db, UserCreate(username=username, password=password))
    await db.commit()
    return user


@pytest.fixture
async def alice(db_session) -> User:
    return await create_user(db_session, *ALICE_AUTH)


@pytest.fixture
async def bob(db_session) -> User:
    return await create_user(db_session, *BOB_AUTH)


@pytest.fixture
async def budgets(db_session, alice, bob):
    """
    Alice owns budget 1 with category 10, Bob owns budget 2 with category 20.
    """
    household = Budget(id=1, name="Household")
    travel = Budget(id=2, name="Travel")
    db_session.add_all([household, travel])
    await db_session.flush()
    await PermissionService.grant(db_session, alice, household, PermissionLevel.OWNER)
    await PermissionService.grant(db_session, bob, travel, PermissionLevel.OWNER)
    db_session.add_all([
        Category(id=10, budget_id=1, title="Groceries", amount=40000, expense=True),
        Category(id=20, budget_id=2, title="Flights", amount=150000, expense=True),
    ])
    await db_session.commit()
    return {"household": household, "travel": travel}


async def add_transaction(
    db: AsyncSession,
    created_by: User,
    budget_id: int,
    amount: int,
    date: datetime,
    category_id=None,
    title: str = "Purchase",
) -> Transaction:
    transaction = Transaction(
        budget_id=budget_id,
        category_id=category_id,
        created_by_id=created_by.id,
        title=title,
        date=date,
        amount=amount,
        expense=True,
    )
    db.add(transaction)
    await db.commit()
    return transaction


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
