from enum import Enum
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from budget_server.core.logging import logger


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class PaginationParams:
    """Parameters for pagination and sorting of list endpoints."""

    def __init__(
        self,
        page: int = 1,
        size: int = 1000,
        sort_by: Optional[str] = None,
        sort_order: SortOrder = SortOrder.DESC
    ):
        self.page = max(page, 1)
        self.size = size
        self.sort_by = sort_by
        self.sort_order = sort_order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


def apply_sorting(query: Any, pagination: PaginationParams, sort_fields: Dict[str, Any], default_field: str) -> Any:
    """
    Order a query by one of the allowed columns.

    Unknown sort fields fall back to ``default_field``. The primary key of the
    default column's table is used as a tie breaker so pages stay stable.
    """
    sort_col = sort_fields.get(pagination.sort_by) if pagination.sort_by else None
    if sort_col is None:
        if pagination.sort_by:
            logger.debug(f"Unknown sort field '{pagination.sort_by}', sorting by '{default_field}'")
        sort_col = sort_fields[default_field]
    direction = sort_col.desc() if pagination.sort_order == SortOrder.DESC else sort_col.asc()
    tie_breaker = sort_fields.get("id")
    if tie_breaker is not None and tie_breaker is not sort_col:
        return query.order_by(direction, tie_breaker.asc())
    return query.order_by(direction)


async def paginate_query(
    db: AsyncSession,
    query: Any,
    pagination: PaginationParams,
    sort_fields: Optional[Dict[str, Any]] = None,
    default_field: str = "id",
) -> List[Any]:
    """
    Sort and slice an ORM select, returning the matching entities.

    Args:
        db: Database session
        query: SQLAlchemy select of a mapped entity
        pagination: Pagination parameters
        sort_fields: Allowed sort fields mapped to columns
        default_field: Sort field used when none (or an unknown one) is requested
    """
    if sort_fields:
        query = apply_sorting(query, pagination, sort_fields, default_field)
    result = await db.execute(query.offset(pagination.offset).limit(pagination.size))
    return list(result.scalars().all())
