from flask import current_app
from content_service.extensions import db
from content_service.models.page import Page
from content_service.models.page_version import PageVersion
from content_service.application.cms.query_page import lock_page
from content_service.utils.audit import log_action
from content_service.utils.transaction import transactional


def delete_page(
    *,
    page_id: str,
    actor_id: str,
) -> None:
    """
    Hard-delete a page and its version history.

    Notes:
    - Child pages are detached, not deleted
    - Redirects pointing at the page's former paths are left in place
    """
    page = lock_page(page_id)

    with transactional():
        # Bulk delete bypasses the immutability guard on PageVersion
        PageVersion.query.filter_by(
            page_id=page.id,
        ).delete(synchronize_session=False)

        Page.query.filter_by(
            parent_id=page.id,
        ).update({"parent_id": None}, synchronize_session=False)

        db.session.delete(page)

        log_action(
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            actor_id=actor_id,
            payload={"path": page.path},
        )

    current_app.logger.info("Page deleted: %s", page_id)
