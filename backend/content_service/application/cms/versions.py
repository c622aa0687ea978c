# content_service/application/cms/versions.py
from typing import Any, Dict, Optional
from content_service.extensions import db
from content_service.models.page import Page
from content_service.models.page_version import PageVersion
from content_service.domain.exceptions import NotFound
from content_service.utils.pagination import paginate


def list_versions(
    *,
    page_id: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
):
    """Snapshots of a page, newest version first."""
    if db.session.get(Page, page_id) is None:
        raise NotFound(f'Page with id "{page_id}" not found')

    query = (
        PageVersion.query
        .filter_by(page_id=page_id)
        .order_by(PageVersion.version.desc())
    )
    return paginate(query, page=page, limit=limit)


def get_version(version_id: str) -> PageVersion:
    version = db.session.get(PageVersion, version_id)
    if not version:
        raise NotFound(f'Version with id "{version_id}" not found')
    return version


def get_version_by_number(page_id: str, version_number: int) -> Optional[PageVersion]:
    """
    Historical lookup by the page version a snapshot captured. Version
    numbers are facts, not list positions, so gaps are allowed.
    """
    return (
        PageVersion.query
        .filter_by(page_id=page_id, version=version_number)
        .first()
    )


def compare_versions(version_a_id: str, version_b_id: str) -> Dict[str, Any]:
    """
    Structural comparison of two snapshots.

    Content trees and SEO blocks are compared as decoded JSON, so key order
    does not count as a change.
    """
    version_a = get_version(version_a_id)
    version_b = get_version(version_b_id)

    return {
        "version_a": _version_ref(version_a),
        "version_b": _version_ref(version_b),
        "title_changed": version_a.title != version_b.title,
        "content_tree_changed": version_a.content_tree != version_b.content_tree,
        "seo_changed": version_a.seo != version_b.seo,
    }


def _version_ref(version: PageVersion) -> Dict[str, Any]:
    return {
        "id": version.id,
        "version": version.version,
        "created_at": version.created_at.isoformat() if version.created_at else None,
    }
