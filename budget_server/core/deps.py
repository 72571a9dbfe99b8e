"""
Dependencies for FastAPI endpoints.

This module provides request parameter parsing shared by list endpoints.
"""

from typing import Optional
from fastapi import Query
from budget_server.core.config import settings
from budget_server.core.logging import logger
from budget_server.utils.pagination import PaginationParams, SortOrder


def parse_sort_order(value: Optional[str]) -> SortOrder:
    """Parse ``ASC``/``DESC`` case-insensitively, defaulting to descending."""
    if not value:
        return SortOrder.DESC
    try:
        return SortOrder(value.strip().upper())
    except ValueError:
        logger.warning(f"Unknown sort order '{value}', using DESC")
        return SortOrder.DESC


def get_pagination_params(
    count: Optional[int] = Query(None, description="Page size"),
    page: Optional[int] = Query(None, description="Page number, starting at 1"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="ASC or DESC")
) -> PaginationParams:
    """
    Get pagination parameters from request query.

    Missing or non-positive values fall back to page 1 and the configured
    default page size.

    Returns:
        PaginationParams object with extracted values
    """
    size = count if count and count > 0 else settings.default_page_size
    return PaginationParams(
        page=page if page and page > 0 else 1,
        size=size,
        sort_by=sort_by,
        sort_order=parse_sort_order(sort_order),
    )
