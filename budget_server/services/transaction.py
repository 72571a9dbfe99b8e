"""
Service layer for transaction operations.

This module contains the business logic for transaction-related operations,
abstracting away the database operations from the API endpoints. Permission
checks on the budgets passed in are the caller's responsibility, except for
budget reassignment on update, which needs its own check.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from budget_server.core.logging import logger
from budget_server.models.budget import Budget
from budget_server.models.category import Category
from budget_server.models.transaction import Transaction
from budget_server.models.user import User
from budget_server.schemas.transaction import TransactionCreate, TransactionUpdate
from budget_server.utils.dates import as_utc
from budget_server.utils.pagination import PaginationParams, paginate_query
from .category import CategoryService
from .permission import PermissionService

# Allowed ``sortBy`` values
SORT_FIELDS = {
    "id": Transaction.id,
    "title": Transaction.title,
    "date": Transaction.date,
    "amount": Transaction.amount,
    "expense": Transaction.expense,
    "createdAt": Transaction.created_at,
    "created_at": Transaction.created_at,
}

# Fields of TransactionUpdate copied straight onto the model
SCALAR_FIELDS = ("title", "description", "date", "amount", "expense")
NULLABLE_FIELDS = {"description"}


class TransactionService:
    """Service class for transaction operations."""

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        transaction_id: int
    ) -> Optional[Transaction]:
        """
        Get a transaction by ID.

        Args:
            db: Database session
            transaction_id: Transaction ID

        Returns:
            Transaction if found, None otherwise
        """
        logger.debug(f"Getting transaction by ID: {transaction_id}")

        result = await db.execute(
            select(Transaction).where(Transaction.id == transaction_id)
        )
        return result.scalars().first()

    @staticmethod
    async def get_by_id_in_budgets(
        db: AsyncSession,
        transaction_id: int,
        budget_ids: Iterable[int]
    ) -> Optional[Transaction]:
        """
        Get a transaction by ID, only if it belongs to one of the given budgets.

        Args:
            db: Database session
            transaction_id: Transaction ID
            budget_ids: Budgets the transaction may belong to

        Returns:
            Transaction if found, None otherwise
        """
        budget_ids = list(budget_ids)
        if not budget_ids:
            return None
        result = await db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.budget_id.in_(budget_ids),
            )
        )
        return result.scalars().first()

    @staticmethod
    async def find_all(
        db: AsyncSession,
        budget_ids: Iterable[int],
        category_ids: Iterable[int],
        start: datetime,
        end: datetime,
        pagination: PaginationParams
    ) -> List[Transaction]:
        """
        Find transactions in a set of budgets within a date window.

        Args:
            db: Database session
            budget_ids: Budgets to search
            category_ids: Categories to match; uncategorized transactions
                never match
            start: Exclusive lower bound for the transaction date
            end: Exclusive upper bound for the transaction date
            pagination: Page, page size and sort order

        Returns:
            Matching transactions
        """
        budget_ids = list(budget_ids)
        category_ids = list(category_ids)
        if not budget_ids or not category_ids:
            return []
        query = select(Transaction).where(
            Transaction.budget_id.in_(budget_ids),
            Transaction.category_id.in_(category_ids),
            Transaction.date > as_utc(start),
            Transaction.date < as_utc(end),
        )

        logger.debug(
            f"Finding transactions in budgets {budget_ids} between {start.isoformat()} "
            f"and {end.isoformat()}, page={pagination.page}, size={pagination.size}"
        )
        return await paginate_query(db, query, pagination, SORT_FIELDS, default_field="date")

    @staticmethod
    async def create(
        db: AsyncSession,
        transaction_in: TransactionCreate,
        budget: Budget,
        category: Optional[Category],
        created_by: User
    ) -> Transaction:
        """
        Create a new transaction.

        Args:
            db: Database session
            transaction_in: Transaction creation data
            budget: Authorized budget the transaction is recorded in
            category: Category already resolved against ``budget``, or None
            created_by: User recording the transaction

        Returns:
            Created transaction
        """
        logger.info(
            f"Creating new {'expense' if transaction_in.expense else 'income'} transaction "
            f"for budget: {budget.id}"
        )

        transaction = Transaction(
            title=transaction_in.title,
            description=transaction_in.description,
            date=as_utc(transaction_in.date),
            amount=transaction_in.amount,
            expense=transaction_in.expense,
            budget=budget,
            category=category,
            created_by=created_by,
        )
        db.add(transaction)
        await db.flush()
        await db.refresh(transaction)

        logger.info(f"Created transaction with ID: {transaction.id}")
        return transaction

    @staticmethod
    async def update(
        db: AsyncSession,
        transaction: Transaction,
        budget: Budget,
        transaction_in: TransactionUpdate,
        user: User
    ) -> Transaction:
        """
        Apply a partial update to a transaction.

        Scalar fields are copied first. A new ``budgetId`` is only honoured
        when ``user`` has a permission on that budget; moving the transaction
        clears its category. A ``categoryId`` is then resolved against the
        final budget and silently dropped when it does not belong there.

        Args:
            db: Database session
            transaction: Transaction to update
            budget: Transaction's current budget, already authorized
            transaction_in: Fields to change
            user: User performing the update

        Returns:
            Updated transaction
        """
        logger.info(f"Updating transaction with ID: {transaction.id}")

        update_data = transaction_in.model_dump(exclude_unset=True)
        for field in SCALAR_FIELDS:
            if field not in update_data:
                continue
            value = update_data[field]
            if value is None and field not in NULLABLE_FIELDS:
                continue
            if field == "date":
                value = as_utc(value)
            setattr(transaction, field, value)

        new_budget_id = update_data.get("budget_id")
        if new_budget_id is not None:
            new_budget = await PermissionService.get_budget_for_user(db, user, new_budget_id)
            if new_budget is not None:
                if new_budget.id != transaction.budget_id:
                    logger.info(
                        f"Moving transaction {transaction.id} from budget "
                        f"{transaction.budget_id} to {new_budget.id}"
                    )
                budget = new_budget
                transaction.budget = new_budget
                transaction.category = None
            else:
                logger.warning(
                    f"Ignoring budget {new_budget_id} for transaction {transaction.id}: "
                    f"user {user.id} has no permission on it"
                )

        new_category_id = update_data.get("category_id")
        if new_category_id is not None:
            category = await CategoryService.get_by_budget_and_id(db, budget.id, new_category_id)
            if category is not None:
                transaction.category = category
            else:
                logger.debug(
                    f"Ignoring category {new_category_id}: not found in budget {budget.id}"
                )

        await db.flush()
        await db.refresh(transaction)

        logger.info(f"Updated transaction ID: {transaction.id}")
        return transaction

    @staticmethod
    async def delete(db: AsyncSession, transaction: Transaction) -> None:
        """Delete a transaction whose budget the caller has access to."""
        transaction_id = transaction.id
        await db.delete(transaction)
        await db.flush()
        logger.info(f"Deleted transaction ID: {transaction_id}")

    @staticmethod
    async def delete_for_budget(db: AsyncSession, budget_id: int) -> None:
        await db.execute(delete(Transaction).where(Transaction.budget_id == budget_id))
