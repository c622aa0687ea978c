# content_service/utils/pagination.py
from __future__ import annotations

from typing import Optional, Tuple

from flask import current_app
from flask_sqlalchemy.pagination import Pagination
from flask_sqlalchemy.query import Query

from content_service.domain.exceptions import ValidationError


def resolve_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """
    Apply defaults and bounds to offset pagination parameters.

    Raises:
    - ValidationError if page < 1 or limit is outside 1..MAX_PAGE_SIZE
    """
    max_limit = current_app.config["MAX_PAGE_SIZE"]

    page = 1 if page is None else page
    limit = current_app.config["DEFAULT_PAGE_SIZE"] if limit is None else limit

    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError("page must be an integer greater than zero")

    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= max_limit:
        raise ValidationError(f"limit must be an integer between 1 and {max_limit}")

    return page, limit


def paginate(query: Query, *, page: Optional[int], limit: Optional[int]) -> Pagination:
    """
    Execute an offset-paginated query.

    The caller owns ordering. Out-of-range pages yield an empty item list.
    """
    page, limit = resolve_pagination(page, limit)
    return query.paginate(page=page, per_page=limit, error_out=False)
