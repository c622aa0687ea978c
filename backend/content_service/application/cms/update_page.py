import copy
from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from content_service.extensions import db
from content_service.models.page import Page
from content_service.application.cms.query_page import lock_page
from content_service.application.cms.redirects import record_redirect
from content_service.domain.exceptions import Conflict, NotFound, ValidationError, VersionConflict
from content_service.domain.invariants.path import assert_title, normalize_path
from content_service.utils.audit import log_action
from content_service.utils.optimistic_lock import enforce_expected_version
from content_service.utils.transaction import transactional
from content_service.utils.versioning import snapshot_page


ALLOWED_UPDATE_FIELDS = {"title", "path", "content_tree", "seo", "parent_id", "position"}


def update_page(
    *,
    page_id: str,
    actor_id: str,
    data: Dict[str, Any],
    expected_version: Optional[int] = None,
) -> Page:
    """
    Apply a partial patch to a page as a new version.

    Design rules:
    - The pre-patch state is always snapshotted, even for a no-op patch
    - Only fields present in the patch change; explicit None clears seo/parent_id
    - A path change records a 301 redirect from the old path
    - Snapshot, page write and redirect commit or roll back together
    """
    changes = _validate_patch(data)

    page = lock_page(page_id)
    enforce_expected_version(page, expected_version)

    parent_id = changes.get("parent_id")
    if parent_id is not None:
        if parent_id == page.id:
            raise ValidationError("A page cannot be its own parent")
        if db.session.get(Page, parent_id) is None:
            raise NotFound(f'Parent page with id "{parent_id}" not found')

    old_path = page.path
    old_version = page.version
    new_path = changes.get("path")

    try:
        with transactional():
            snapshot_page(page, actor_id)

            if new_path is not None and new_path != old_path:
                clash = (
                    Page.query
                    .filter(Page.path == new_path, Page.id != page.id)
                    .first()
                )
                if clash:
                    raise Conflict(f'A page with path "{new_path}" already exists')

                record_redirect(from_path=old_path, to_path=new_path, status_code=301)

            for field, value in changes.items():
                setattr(page, field, value)

            page.version = old_version + 1

            log_action(
                action="page.update",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor_id,
                payload={
                    "fields": sorted(changes),
                    "from_version": old_version,
                    "to_version": old_version + 1,
                },
            )

    except IntegrityError as exc:
        current_app.logger.warning("Update of page %s rejected: %s", page_id, exc.orig)
        if "page_version" in str(exc.orig):
            raise VersionConflict(
                "Page was modified by another request; reload it and retry",
                expected=old_version,
            ) from exc
        raise Conflict(f'A page with path "{new_path}" already exists') from exc

    current_app.logger.info("Page updated: %s (v%s)", page_id, old_version + 1)
    return page


def _validate_patch(data: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Patch must be an object")

    unknown = set(data) - ALLOWED_UPDATE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

    changes: Dict[str, Any] = {}

    if "title" in data:
        changes["title"] = assert_title(data["title"])

    if "path" in data:
        changes["path"] = normalize_path(data["path"])

    if "content_tree" in data:
        if not isinstance(data["content_tree"], dict):
            raise ValidationError("content_tree must be an object")
        changes["content_tree"] = copy.deepcopy(data["content_tree"])

    if "seo" in data:
        if data["seo"] is not None and not isinstance(data["seo"], dict):
            raise ValidationError("seo must be an object or null")
        changes["seo"] = copy.deepcopy(data["seo"])

    if "parent_id" in data:
        if data["parent_id"] is not None and not isinstance(data["parent_id"], str):
            raise ValidationError("parent_id must be a string or null")
        changes["parent_id"] = data["parent_id"]

    if "position" in data:
        position = data["position"]
        if isinstance(position, bool) or not isinstance(position, int):
            raise ValidationError("position must be an integer")
        changes["position"] = position

    return changes
