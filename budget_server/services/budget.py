"""
Service layer for budget operations.

This module contains the business logic for budget-related operations,
abstracting away the database operations from the API endpoints.
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete as sql_delete
from sqlalchemy.orm import selectinload

from budget_server.core.logging import logger
from budget_server.models.budget import Budget
from budget_server.models.permission import Permission, PermissionLevel
from budget_server.models.user import User
from budget_server.schemas.budget import BudgetCreate, BudgetUpdate, UserPermissionRequest
from budget_server.utils.pagination import PaginationParams
from .category import CategoryService
from .permission import PermissionService
from .transaction import TransactionService
from .user import UserService


def _with_permissions(query):
    return query.options(selectinload(Budget.permissions).selectinload(Permission.user))


class BudgetService:
    """Service class for budget operations."""

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        budget_id: int
    ) -> Optional[Budget]:
        """
        Get a budget by ID with its permissions loaded.

        Args:
            db: Database session
            budget_id: Budget ID

        Returns:
            Budget if found, None otherwise
        """
        logger.debug(f"Getting budget by ID: {budget_id}")
        result = await db.execute(
            _with_permissions(select(Budget)).where(Budget.id == budget_id)
        )
        return result.scalars().first()

    @staticmethod
    async def get_all_for_user(
        db: AsyncSession,
        user: User,
        pagination: PaginationParams
    ) -> List[Budget]:
        """
        Get the budgets a user has any permission on.

        Args:
            db: Database session
            user: User whose budgets are listed
            pagination: Page of budgets, ordered by name

        Returns:
            List of budgets with permissions loaded
        """
        query = (
            _with_permissions(select(Budget))
            .join(Permission, Permission.budget_id == Budget.id)
            .where(Permission.user_id == user.id)
            .order_by(Budget.name, Budget.id)
            .offset(pagination.offset)
            .limit(pagination.size)
        )
        result = await db.execute(query)
        return list(result.scalars().unique().all())

    @staticmethod
    async def create(
        db: AsyncSession,
        budget_in: BudgetCreate,
        owner: User
    ) -> Budget:
        """
        Create a new budget owned by ``owner``.

        Args:
            db: Database session
            budget_in: Budget creation data
            owner: User creating the budget, granted OWNER

        Returns:
            Created budget
        """
        logger.info(f"Creating new budget '{budget_in.name}' for user: {owner.id}")

        budget = Budget(name=budget_in.name, description=budget_in.description)
        db.add(budget)
        await db.flush()

        await PermissionService.grant(db, owner, budget, PermissionLevel.OWNER)
        await BudgetService._share(db, budget, budget_in.users or [], owner)

        logger.info(f"Created budget with ID: {budget.id}")
        return await BudgetService.reload(db, budget)

    @staticmethod
    async def update(
        db: AsyncSession,
        budget: Budget,
        budget_in: BudgetUpdate,
        acting_user: User
    ) -> Budget:
        """
        Apply a partial update to a budget.

        When ``users`` is supplied, every non-owner grant is replaced by the
        supplied list.

        Args:
            db: Database session
            budget: Budget to update
            budget_in: Fields to change
            acting_user: User performing the update

        Returns:
            Updated budget
        """
        logger.info(f"Updating budget with ID: {budget.id}")

        update_data = budget_in.model_dump(exclude_unset=True)
        if update_data.get("name") is not None:
            budget.name = update_data["name"]
        if "description" in update_data:
            budget.description = update_data["description"]

        if budget_in.users is not None:
            await PermissionService.revoke_all_except_owners(db, budget)
            await BudgetService._share(db, budget, budget_in.users, acting_user)

        await db.flush()
        logger.info(f"Updated budget ID: {budget.id}")
        return await BudgetService.reload(db, budget)

    @staticmethod
    async def delete(db: AsyncSession, budget: Budget) -> None:
        """
        Delete a budget together with its transactions, categories and permissions.

        Args:
            db: Database session
            budget: Budget to delete
        """
        budget_id = budget.id
        logger.info(f"Deleting budget with ID: {budget_id}")
        await TransactionService.delete_for_budget(db, budget_id)
        await CategoryService.delete_for_budget(db, budget_id)
        await PermissionService.delete_for_budget(db, budget_id)
        await db.execute(sql_delete(Budget).where(Budget.id == budget_id))
        await db.flush()
        logger.info(f"Deleted budget ID: {budget_id}")

    @staticmethod
    async def reload(db: AsyncSession, budget: Budget) -> Budget:
        """Re-read a budget so its permission list reflects pending changes."""
        db.expire(budget, ["permissions"])
        await db.refresh(budget, attribute_names=["permissions"])
        return budget

    @staticmethod
    async def _share(
        db: AsyncSession,
        budget: Budget,
        grants: List[UserPermissionRequest],
        acting_user: User
    ) -> None:
        for grant in grants:
            if grant.user_id == acting_user.id:
                continue
            user = await UserService.get_by_id(db, grant.user_id)
            if user is None:
                logger.warning(f"Ignoring share of budget {budget.id} with unknown user {grant.user_id}")
                continue
            existing = await PermissionService.get_permission(db, user, budget.id)
            if existing is not None and existing.permission == PermissionLevel.OWNER:
                continue
            await PermissionService.grant(db, user, budget, grant.permission)
