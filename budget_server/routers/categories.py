"""
Category API endpoints.
This module provides CRUD endpoints for the categories of shared budgets.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.auth import get_current_active_user
from budget_server.core.deps import get_pagination_params
from budget_server.core.exceptions import InvalidRequestError, NotFoundError
from budget_server.core.logging import logger
from budget_server.db.session import get_db
from budget_server.models.category import Category as CategoryModel
from budget_server.models.user import User
from budget_server.schemas.base import ErrorResponse
from budget_server.schemas.category import Category, CategoryCreate, CategoryUpdate
from budget_server.services.category import CategoryService
from budget_server.services.permission import PermissionService
from budget_server.utils.pagination import PaginationParams

router = APIRouter()

CATEGORY_NOT_FOUND = "Category not found"


async def get_accessible_category(db: AsyncSession, user: User, category_id: int) -> CategoryModel:
    category = await CategoryService.get_by_id(db, category_id)
    if category is None or not await PermissionService.has_access(db, user, category.budget_id):
        raise NotFoundError(CATEGORY_NOT_FOUND)
    return category


@router.get("", response_model=List[Category])
async def get_categories(
    budget_ids: Optional[List[int]] = Query(None, alias="budgetId", description="Filter by budget IDs"),
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> List[Category]:
    """
    Get the categories of the budgets the current user has access to.

    Args:
        budget_ids: Optional budget IDs to filter by
        pagination: Page number and page size
        db: Database session
        current_user: Current authenticated user

    Returns:
        List of categories ordered by title
    """
    budgets = await PermissionService.get_budgets_for_user(db, current_user, budget_ids)
    return await CategoryService.get_all_by_budgets(
        db, [budget.id for budget in budgets], pagination=pagination
    )


@router.get("/{category_id}", response_model=Category, responses={404: {"model": ErrorResponse}})
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Category:
    """Get a category by ID."""
    return await get_accessible_category(db, current_user, category_id)


@router.post("/new", response_model=Category, responses={400: {"model": ErrorResponse}})
async def create_category(
    category_in: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Category:
    """
    Create a new category.

    Raises:
        InvalidRequestError: If the user has no permission on the budget
    """
    budget = await PermissionService.get_budget_for_user(db, current_user, category_in.budget_id)
    if budget is None:
        logger.warning(
            f"Category creation failed: user {current_user.id} "
            f"has no permission on budget {category_in.budget_id}"
        )
        raise InvalidRequestError("Invalid budget ID")
    return await CategoryService.create(db, category_in, budget)


@router.put("/{category_id}", response_model=Category, responses={404: {"model": ErrorResponse}})
async def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Category:
    """Update a category's title, description, amount or expense flag."""
    category = await get_accessible_category(db, current_user, category_id)
    return await CategoryService.update(db, category, category_in)


@router.delete("/{category_id}", responses={404: {"model": ErrorResponse}})
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> Response:
    """
    Delete a category. Its transactions are kept without a category.
    """
    category = await get_accessible_category(db, current_user, category_id)
    await CategoryService.delete(db, category)
    return Response(status_code=status.HTTP_200_OK)
