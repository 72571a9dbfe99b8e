"""
Service layer for category operations.

Categories are always looked up through the budget they belong to, so a
category id alone never grants access to anything.
"""

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from budget_server.core.logging import logger
from budget_server.models.budget import Budget
from budget_server.models.category import Category
from budget_server.models.transaction import Transaction
from budget_server.schemas.category import CategoryCreate, CategoryUpdate
from budget_server.utils.pagination import PaginationParams


class CategoryService:
    """Service class for category operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, category_id: int) -> Optional[Category]:
        result = await db.execute(select(Category).where(Category.id == category_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_budget_and_id(
        db: AsyncSession,
        budget_id: int,
        category_id: int
    ) -> Optional[Category]:
        """
        Get a category by ID, only if it belongs to the given budget.

        Args:
            db: Database session
            budget_id: Budget the category must belong to
            category_id: Category ID

        Returns:
            Category if found in that budget, None otherwise
        """
        result = await db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.budget_id == budget_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def get_all_by_budgets(
        db: AsyncSession,
        budget_ids: Iterable[int],
        category_ids: Optional[Iterable[int]] = None,
        pagination: Optional[PaginationParams] = None
    ) -> List[Category]:
        """
        Get the categories of a set of budgets.

        Args:
            db: Database session
            budget_ids: Budgets to search
            category_ids: Optional category IDs to restrict the result to
            pagination: Optional page, ordered by title

        Returns:
            List of categories
        """
        budget_ids = list(budget_ids)
        if not budget_ids:
            return []
        query = select(Category).where(Category.budget_id.in_(budget_ids))
        if category_ids is not None:
            query = query.where(Category.id.in_(list(category_ids)))
        query = query.order_by(Category.title, Category.id)
        if pagination is not None:
            query = query.offset(pagination.offset).limit(pagination.size)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def create(
        db: AsyncSession,
        category_in: CategoryCreate,
        budget: Budget
    ) -> Category:
        """Create a category inside an already authorized budget."""
        logger.info(f"Creating category '{category_in.title}' in budget {budget.id}")
        category = Category(
            budget=budget,
            title=category_in.title,
            description=category_in.description,
            amount=category_in.amount,
            expense=category_in.expense,
        )
        db.add(category)
        await db.flush()
        await db.refresh(category)
        logger.info(f"Created category with ID: {category.id}")
        return category

    @staticmethod
    async def update(
        db: AsyncSession,
        category: Category,
        category_in: CategoryUpdate
    ) -> Category:
        """
        Apply a partial update to a category.

        Args:
            db: Database session
            category: Category to update
            category_in: Fields to change; unset or null fields are kept

        Returns:
            Updated category
        """
        update_data = category_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(category, field, value)
        await db.flush()
        await db.refresh(category)
        logger.info(f"Updated category ID: {category.id}")
        return category

    @staticmethod
    async def delete(db: AsyncSession, category: Category) -> None:
        """Delete a category, leaving its transactions uncategorized."""
        await db.execute(
            update(Transaction)
            .where(Transaction.category_id == category.id)
            .values(category_id=None)
        )
        await db.delete(category)
        await db.flush()
        logger.info(f"Deleted category ID: {category.id}")

    @staticmethod
    async def delete_for_budget(db: AsyncSession, budget_id: int) -> None:
        await db.execute(delete(Category).where(Category.budget_id == budget_id))
