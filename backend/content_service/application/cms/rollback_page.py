# content_service/application/cms/rollback_page.py
import copy
from typing import Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from content_service.models.page import Page
from content_service.application.cms.query_page import lock_page
from content_service.application.cms.versions import get_version_by_number
from content_service.domain.exceptions import NotFound, VersionConflict
from content_service.utils.audit import log_action
from content_service.utils.optimistic_lock import enforce_expected_version
from content_service.utils.transaction import transactional
from content_service.utils.versioning import snapshot_page


def rollback_page(
    *,
    page_id: str,
    rollback_version: int,
    actor_id: str,
    expected_version: Optional[int] = None,
) -> Page:
    """
    Restore a historical snapshot's content as a brand-new version.

    Responsibilities:
    - Snapshot the state being overwritten, keyed at the pre-rollback version
    - Copy title, content tree and SEO metadata from the target snapshot
    - Mint version = current + 1; never rewind to the target's number
    - Audit logging

    The path is not part of a snapshot and stays as it is.
    """

    # 1️⃣ Fetch live Page with row-level lock
    page = lock_page(page_id)
    enforce_expected_version(page, expected_version)

    # 2️⃣ Fetch the PageVersion to roll back to
    target = get_version_by_number(page.id, rollback_version)
    if not target:
        raise NotFound(
            f'Version {rollback_version} not found for page "{page_id}"'
        )

    from_version = page.version

    try:
        with transactional():
            # 3️⃣ Preserve exactly the state being overwritten
            snapshot_page(page, actor_id)

            # 4️⃣ Restore content from the snapshot as a new version
            page.title = target.title
            page.content_tree = copy.deepcopy(target.content_tree)
            page.seo = copy.deepcopy(target.seo)
            page.version = from_version + 1

            # 5️⃣ Audit logging
            log_action(
                action="page.rollback",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor_id,
                payload={
                    "restored_version": rollback_version,
                    "from_version": from_version,
                    "to_version": from_version + 1,
                },
            )

    except IntegrityError as exc:
        current_app.logger.warning("Rollback of page %s rejected: %s", page_id, exc.orig)
        raise VersionConflict(
            "Page was modified by another request; reload it and retry",
            expected=from_version,
        ) from exc

    current_app.logger.info(
        "Page rolled back: %s to v%s (now v%s)",
        page_id, rollback_version, from_version + 1,
    )
    return page
