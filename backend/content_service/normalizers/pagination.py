# content_service/normalizers/pagination.py
from typing import Callable, Any, Dict

from flask_sqlalchemy.pagination import Pagination


def normalize_pagination(
    pagination: Pagination,
    normalize_fn: Callable[[Any], Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Normalize an offset-paginated result into API-safe JSON.

    Shape:
    {
        "items": [...],
        "total": <int>,
        "pagination": {"page", "per_page", "total", "total_pages"}
    }
    """

    # Normalize ORM objects → dicts
    normalized_items = [normalize_fn(item) for item in pagination.items]

    total = pagination.total or 0
    per_page = pagination.per_page

    return {
        "items": normalized_items,
        "total": total,
        "pagination": {
            "page": pagination.page,
            "per_page": per_page,
            "total": total,
            "total_pages": (total + per_page - 1) // per_page,
        },
    }
