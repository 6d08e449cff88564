# blogcms/normalizers/pagination.py
from typing import Callable, Any, Dict

from blogcms.utils.pagination import ListResult


def normalize_pagination(
    result: ListResult,
    normalize_fn: Callable[[Any], Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Normalize an offset-paginated result into the list envelope:

    {"items": [...], "pagination": {page, limit, total, totalPages, hasNext, hasPrev}}

    An empty window is a valid response, not an error.
    """
    page = result["page"]
    pages = result["total_pages"]

    return {
        "items": [normalize_fn(item) for item in result["items"]],
        "pagination": {
            "page": page,
            "limit": result["limit"],
            "total": result["total"],
            "totalPages": pages,
            "hasNext": page < pages,
            "hasPrev": page > 1,
        },
    }
