# blogcms/utils/pagination.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, TypedDict

from flask import current_app, request
from sqlalchemy.orm import Query
from sqlalchemy.sql import or_


class ListResult(TypedDict):
    """
    Offset pagination result shared by every list endpoint.
    """
    items: List[Any]
    total: int
    page: int
    limit: int
    total_pages: int


def clamp_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """
    Clamp caller-provided paging values to sane bounds.

    - page < 1 becomes 1
    - limit outside [1, MAX_PAGE_SIZE] falls back to DEFAULT_PAGE_SIZE
    """
    default_limit = current_app.config.get("DEFAULT_PAGE_SIZE", 20)
    max_limit = current_app.config.get("MAX_PAGE_SIZE", 100)

    page = page if page and page > 0 else 1
    if not limit or limit < 1:
        limit = default_limit
    limit = min(limit, max_limit)
    return page, limit


def pagination_args() -> Tuple[int, int]:
    """Read `page` and `limit` (or `pageSize`) from the query string."""
    page = request.args.get("page", 1, type=int)
    limit = request.args.get("limit", type=int) or request.args.get("pageSize", type=int)
    return clamp_pagination(page, limit)


def total_pages(total: int, limit: int) -> int:
    return (total + limit - 1) // limit


def paginate(query: Query, *, page: int, limit: int) -> ListResult:
    """
    Count, then fetch one window of an already filtered and sorted query.

    Pages past the end yield an empty window, never an error.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()

    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages(total, limit),
    }


def apply_sort(
    query: Query,
    *,
    columns: Dict[str, Any],
    sort_by: Optional[str],
    sort_order: Optional[str],
    default: str,
    tiebreaker: Any = None,
) -> Query:
    """
    Order by an allow-listed column; unknown keys fall back to `default`.
    Direction defaults to descending.
    """
    column = columns.get((sort_by or "").lower(), columns[default])
    ascending = (sort_order or "desc").lower() == "asc"

    ordered = query.order_by(column.asc() if ascending else column.desc())
    if tiebreaker is not None:
        ordered = ordered.order_by(tiebreaker.asc() if ascending else tiebreaker.desc())
    return ordered


def apply_search(query: Query, term: Optional[str], columns: Iterable[Any]) -> Query:
    """Case-insensitive substring match across any of the given columns."""
    if not term:
        return query
    pattern = f"%{term}%"
    return query.filter(or_(*(column.ilike(pattern) for column in columns)))
