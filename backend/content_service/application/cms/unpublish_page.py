# content_service/application/cms/unpublish_page.py
from flask import current_app
from content_service.models.page import Page
from content_service.application.cms.query_page import lock_page
from content_service.utils.transaction import transactional
from content_service.utils.audit import log_action
from content_service.domain.lifecycle.page import assert_page_transition


def unpublish_page(
    *,
    page_id: str,
    actor_id: str,
) -> Page:
    """
    Returns a published page to draft and clears its publish timestamp.
    """
    page = lock_page(page_id)

    with transactional():
        # Only a published page can be unpublished
        assert_page_transition(from_status=page.status, to_status="draft")

        page.status = "draft"
        page.published_at = None

        log_action(
            action="page.unpublish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"version": page.version},
        )

    current_app.logger.info("Page unpublished: %s", page_id)
    return page
