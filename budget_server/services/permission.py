"""
Service layer for budget permissions.

Answers the two questions every endpoint asks before touching a budget:
"may this user access budget B?" and "which budgets may this user access?".
"""

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from budget_server.core.logging import logger
from budget_server.models.budget import Budget
from budget_server.models.permission import Permission, PermissionLevel
from budget_server.models.user import User
from budget_server.utils.pagination import PaginationParams


class PermissionService:
    """Service class for permission lookups and grants."""

    @staticmethod
    async def get_permission(
        db: AsyncSession,
        user: User,
        budget_id: int
    ) -> Optional[Permission]:
        """
        Get the permission linking a user to a budget.

        Args:
            db: Database session
            user: User to check
            budget_id: Budget ID

        Returns:
            Permission if the user has access, None otherwise
        """
        result = await db.execute(
            select(Permission).where(
                Permission.user_id == user.id,
                Permission.budget_id == budget_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def get_budget_for_user(
        db: AsyncSession,
        user: User,
        budget_id: int
    ) -> Optional[Budget]:
        """Get a budget if the user holds any permission on it."""
        permission = await PermissionService.get_permission(db, user, budget_id)
        if permission is None:
            logger.debug(f"User {user.id} has no permission on budget {budget_id}")
            return None
        return permission.budget

    @staticmethod
    async def has_access(db: AsyncSession, user: User, budget_id: int) -> bool:
        return await PermissionService.get_permission(db, user, budget_id) is not None

    @staticmethod
    async def get_budgets_for_user(
        db: AsyncSession,
        user: User,
        budget_ids: Optional[Iterable[int]] = None,
        pagination: Optional[PaginationParams] = None
    ) -> List[Budget]:
        """
        Get all budgets a user can access.

        Args:
            db: Database session
            user: User whose permissions are looked up
            budget_ids: Optional budget IDs to restrict the result to
            pagination: Optional page of budgets, ordered by budget ID

        Returns:
            List of accessible budgets
        """
        query = select(Permission).where(Permission.user_id == user.id)
        if budget_ids is not None:
            query = query.where(Permission.budget_id.in_(list(budget_ids)))
        query = query.order_by(Permission.budget_id)
        if pagination is not None:
            query = query.offset(pagination.offset).limit(pagination.size)
        result = await db.execute(query)
        return [permission.budget for permission in result.scalars().all() if permission.budget is not None]

    @staticmethod
    async def get_budget_ids_for_user(db: AsyncSession, user: User) -> List[int]:
        result = await db.execute(
            select(Permission.budget_id).where(Permission.user_id == user.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def grant(
        db: AsyncSession,
        user: User,
        budget: Budget,
        level: PermissionLevel = PermissionLevel.READ
    ) -> Permission:
        """
        Grant a user access to a budget, updating the level of an existing grant.

        Args:
            db: Database session
            user: User receiving access
            budget: Budget being shared
            level: Permission level

        Returns:
            The new or updated permission
        """
        permission = None
        if budget.id is not None:
            permission = await PermissionService.get_permission(db, user, budget.id)
        if permission is None:
            permission = Permission(user=user, budget=budget, permission=level)
            db.add(permission)
        else:
            permission.permission = level
        await db.flush()
        logger.info(f"Granted {level.value} on budget {budget.id} to user {user.id}")
        return permission

    @staticmethod
    async def revoke_all_except_owners(db: AsyncSession, budget: Budget) -> None:
        """Remove every non-owner grant on a budget."""
        await db.execute(
            delete(Permission).where(
                Permission.budget_id == budget.id,
                Permission.permission != PermissionLevel.OWNER,
            )
        )
        await db.flush()

    @staticmethod
    async def delete_for_budget(db: AsyncSession, budget_id: int) -> None:
        await db.execute(delete(Permission).where(Permission.budget_id == budget_id))
