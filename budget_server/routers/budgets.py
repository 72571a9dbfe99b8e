"""
Budget API endpoints.
This module provides CRUD endpoints for budgets and their sharing list.
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.auth import get_current_active_user
from budget_server.core.deps import get_pagination_params
from budget_server.core.exceptions import ForbiddenError, NotFoundError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.budget import Budget as BudgetModel
from budget_server.models.permission import PermissionLevel
from budget_server.models.user import User
from budget_server.schemas.base import ErrorResponse
from budget_server.schemas.budget import Budget, BudgetCreate, BudgetUpdate
from budget_server.services.budget import BudgetService
from budget_server.services.permission import PermissionService
from budget_server.utils.pagination import PaginationParams

router = APIRouter()

BUDGET_NOT_FOUND = "Budget not found"


async def get_managed_budget(
    db: AsyncSession,
    user: User,
    budget_id: int
) -> BudgetModel:
    """
    Load a budget the user may rename, share or delete.

    Raises:
        NotFoundError: If the user has no permission on the budget
        ForbiddenError: If the user's permission is below MANAGE
    """
    permission = await PermissionService.get_permission(db, user, budget_id)
    if permission is None:
        raise NotFoundError(BUDGET_NOT_FOUND)
    if not permission.permission.allows(PermissionLevel.MANAGE):
        logger.warning(
            f"User {user.id} with {permission.permission.value} tried to manage budget {budget_id}"
        )
        raise ForbiddenError()
    budget = await BudgetService.get_by_id(db, budget_id)
    if budget is None:
        raise NotFoundError(BUDGET_NOT_FOUND)
    return budget


@router.get("", response_model=List[Budget])
async def get_budgets(
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> List[Budget]:
    """
    Get the budgets the current user has access to.

    Args:
        pagination: Page number and page size
        db: Database session
        current_user: Current authenticated user

    Returns:
        List of budgets ordered by name
    """
    return await BudgetService.get_all_for_user(db, current_user, pagination)


@router.get("/{budget_id}", response_model=Budget, responses={404: {"model": ErrorResponse}})
async def get_budget(
    budget_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Budget:
    """
    Get a budget by ID.

    Raises:
        NotFoundError: If the budget does not exist or is not shared with the user
    """
    if not await PermissionService.has_access(db, current_user, budget_id):
        raise NotFoundError(BUDGET_NOT_FOUND)
    budget = await BudgetService.get_by_id(db, budget_id)
    if budget is None:
        raise NotFoundError(BUDGET_NOT_FOUND)
    return budget


@router.post("/new", response_model=Budget)
async def create_budget(
    budget_in: BudgetCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Budget:
    """
    Create a new budget owned by the current user.

    Args:
        budget_in: Budget creation data, optionally with users to share it with
        db: Database session
        current_user: Current authenticated user

    Returns:
        Created budget
    """
    logger.info(f"Budget creation requested by: {current_user.username}")
    budget = await BudgetService.create(db, budget_in, owner=current_user)
    logger.info(f"Budget created successfully: {budget.id}")
    return budget


@router.put(
    "/{budget_id}",
    response_model=Budget,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_budget(
    budget_id: int,
    budget_in: BudgetUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Budget:
    """
    Update a budget's name, description or sharing list.

    Args:
        budget_id: Budget ID
        budget_in: Fields to change
        db: Database session
        current_user: Current authenticated user

    Returns:
        Updated budget
    """
    logger.info(f"Budget update requested for ID: {budget_id} by: {current_user.username}")
    budget = await get_managed_budget(db, current_user, budget_id)
    return await BudgetService.update(db, budget, budget_in, acting_user=current_user)


@router.delete(
    "/{budget_id}",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_budget(
    budget_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Response:
    """
    Delete a budget with all of its categories and transactions.
    """
    logger.info(f"Budget deletion requested for ID: {budget_id} by: {current_user.username}")
    budget = await get_managed_budget(db, current_user, budget_id)
    await BudgetService.delete(db, budget)
    return Response(status_code=status.HTTP_200_OK)
