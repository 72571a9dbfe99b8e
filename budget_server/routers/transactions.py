"""
Transaction API endpoints.
This module provides CRUD endpoints for transactions. Every endpoint is
scoped to the budgets the current user holds a permission on.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.auth import get_current_active_user
from budget_server.core.deps import get_pagination_params
from budget_server.core.exceptions import InvalidRequestError, NotFoundError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.user import User
from budget_server.schemas.base import ErrorResponse
from budget_server.schemas.transaction import (
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)
from budget_server.services.category import CategoryService
from budget_server.services.permission import PermissionService
from budget_server.services.transaction import TransactionService
from budget_server.utils.dates import parse_instant, start_of_month, end_of_month
from budget_server.utils.pagination import PaginationParams

router = APIRouter()

TRANSACTION_NOT_FOUND = "Transaction not found"


@router.get("", response_model=List[Transaction])
async def get_transactions(
    category_ids: Optional[List[int]] = Query(None, alias="categoryId", description="Filter by category IDs"),
    budget_ids: Optional[List[int]] = Query(None, alias="budgetId", description="Filter by budget IDs"),
    from_: Optional[str] = Query(None, alias="from", description="Exclusive ISO-8601 lower bound"),
    to: Optional[str] = Query(None, description="Exclusive ISO-8601 upper bound"),
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> List[Transaction]:
    """
    Get transactions with optional filters, sorting and pagination.

    Args:
        category_ids: Optional category IDs to filter by
        budget_ids: Optional budget IDs to filter by
        from_: Optional start of the date window, defaults to the start of the current month
        to: Optional end of the date window, defaults to the end of the current month
        pagination: Page number, page size and sort order
        db: Database session
        current_user: Current authenticated user

    Returns:
        List of transactions, newest first unless another order is requested
    """
    budgets = await PermissionService.get_budgets_for_user(db, current_user, budget_ids)
    budget_ids_in_scope = [budget.id for budget in budgets]

    categories = await CategoryService.get_all_by_budgets(
        db, budget_ids_in_scope, category_ids or None
    )
    category_ids_in_scope = [category.id for category in categories]

    start = parse_instant(from_, "from") or start_of_month()
    end = parse_instant(to, "to") or end_of_month()

    transactions = await TransactionService.find_all(
        db,
        budget_ids=budget_ids_in_scope,
        category_ids=category_ids_in_scope,
        start=start,
        end=end,
        pagination=pagination,
    )
    logger.info(f"Returning {len(transactions)} transactions for user {current_user.id}")
    return transactions


@router.get("/{transaction_id}", response_model=Transaction, responses={404: {"model": ErrorResponse}})
async def get_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Transaction:
    """
    Get a transaction by ID.

    Args:
        transaction_id: Transaction ID
        db: Database session
        current_user: Current authenticated user

    Returns:
        Transaction

    Raises:
        NotFoundError: If the transaction does not exist or is not visible to the user
    """
    logger.info(f"Transaction details requested for ID: {transaction_id}")
    budget_ids = await PermissionService.get_budget_ids_for_user(db, current_user)
    transaction = await TransactionService.get_by_id_in_budgets(db, transaction_id, budget_ids)
    if transaction is None:
        raise NotFoundError(TRANSACTION_NOT_FOUND)
    return transaction


@router.post("/new", response_model=Transaction, responses={400: {"model": ErrorResponse}})
async def create_transaction(
    transaction_in: TransactionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Transaction:
    """
    Create a new transaction.

    Args:
        transaction_in: Transaction creation data
        db: Database session
        current_user: Current authenticated user

    Returns:
        Created transaction

    Raises:
        InvalidRequestError: If the user has no permission on the budget
    """
    logger.info(f"Transaction creation requested by: {current_user.username}")

    budget = await PermissionService.get_budget_for_user(db, current_user, transaction_in.budget_id)
    if budget is None:
        logger.warning(
            f"Transaction creation failed: user {current_user.id} "
            f"has no permission on budget {transaction_in.budget_id}"
        )
        raise InvalidRequestError("Invalid budget ID")

    category = None
    if transaction_in.category_id is not None:
        category = await CategoryService.get_by_budget_and_id(db, budget.id, transaction_in.category_id)

    transaction = await TransactionService.create(
        db,
        transaction_in,
        budget=budget,
        category=category,
        created_by=current_user,
    )
    logger.info(f"Transaction created successfully: {transaction.id}")
    return transaction


@router.put("/{transaction_id}", response_model=Transaction, responses={404: {"model": ErrorResponse}})
async def update_transaction(
    transaction_id: int,
    transaction_in: TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Transaction:
    """
    Update a transaction.

    Args:
        transaction_id: Transaction ID
        transaction_in: Fields to change
        db: Database session
        current_user: Current authenticated user

    Returns:
        Updated transaction

    Raises:
        NotFoundError: If the transaction does not exist or the user has no
            permission on its current budget
    """
    logger.info(f"Transaction update requested for ID: {transaction_id} by: {current_user.username}")

    transaction = await TransactionService.get_by_id(db, transaction_id)
    if transaction is None:
        logger.warning(f"Transaction not found for update: {transaction_id}")
        raise NotFoundError(TRANSACTION_NOT_FOUND)

    budget = await PermissionService.get_budget_for_user(db, current_user, transaction.budget_id)
    if budget is None:
        logger.warning(f"Transaction {transaction_id} update denied for user {current_user.id}")
        raise NotFoundError(TRANSACTION_NOT_FOUND)

    updated_transaction = await TransactionService.update(
        db,
        transaction,
        budget,
        transaction_in,
        user=current_user,
    )
    logger.info(f"Transaction updated successfully: {transaction_id}")
    return updated_transaction


@router.delete("/{transaction_id}", responses={404: {"model": ErrorResponse}})
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Response:
    """
    Delete a transaction.

    Args:
        transaction_id: Transaction ID
        db: Database session
        current_user: Current authenticated user

    Raises:
        NotFoundError: If the transaction does not exist or the user has no
            permission on its budget
    """
    logger.info(f"Transaction deletion requested for ID: {transaction_id} by: {current_user.username}")

    transaction = await TransactionService.get_by_id(db, transaction_id)
    if transaction is None:
        logger.warning(f"Transaction not found for deletion: {transaction_id}")
        raise NotFoundError(TRANSACTION_NOT_FOUND)

    # The transaction must belong to a budget the user has access to
    if not await PermissionService.has_access(db, current_user, transaction.budget_id):
        logger.warning(f"Transaction {transaction_id} deletion denied for user {current_user.id}")
        raise NotFoundError(TRANSACTION_NOT_FOUND)

    await TransactionService.delete(db, transaction)
    logger.info(f"Transaction deleted successfully: {transaction_id}")
    return Response(status_code=status.HTTP_200_OK)
