from typing import Optional
from sqlalchemy import select
from content_service.extensions import db
from content_service.models.page import Page
from content_service.domain.exceptions import NotFound, ValidationError
from content_service.domain.invariants.path import normalize_path
from content_service.domain.lifecycle.page import PAGE_STATUSES
from content_service.utils.pagination import paginate

SORTABLE_FIELDS = {"created_at", "updated_at", "title", "path", "position"}


def get_page(page_id: str) -> Page:
    page = db.session.get(Page, page_id)
    if not page:
        raise NotFound(f'Page with id "{page_id}" not found')
    return page


def get_page_by_path(path: str) -> Page:
    path = normalize_path(path)
    page = Page.query.filter_by(path=path).first()
    if not page:
        raise NotFound(f'Page with path "{path}" not found')
    return page


def list_pages(
    *,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    status: Optional[str] = None,
    is_template: Optional[bool] = None,
    sort_by: str = "updated_at",
    sort_order: str = "desc",
):
    """
    Paginated page listing, optionally filtered by status and template flag.
    """
    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError(f"Cannot sort pages by {sort_by!r}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sort_order must be 'asc' or 'desc'")
    if status is not None and status not in PAGE_STATUSES:
        raise ValidationError(f"Unknown page status {status!r}")

    query = Page.query
    if status:
        query = query.filter_by(status=status)
    if is_template is not None:
        query = query.filter_by(is_template=is_template)

    column = getattr(Page, sort_by)
    ordering = column.asc() if sort_order == "asc" else column.desc()

    return paginate(query.order_by(ordering, Page.id.asc()), page=page, limit=limit)


def lock_page(page_id: str) -> Page:
    """
    Fetch the live page with a row-level lock (SELECT ... FOR UPDATE) where
    the backend supports it.
    """
    page = (
        db.session.execute(
            select(Page)
            .where(Page.id == page_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not page:
        raise NotFound(f'Page with id "{page_id}" not found')
    return page
