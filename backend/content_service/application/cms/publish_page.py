# content_service/application/cms/publish_page.py
from flask import current_app
from content_service.models.base import utc_now
from content_service.models.page import Page
from content_service.application.cms.query_page import lock_page
from content_service.utils.transaction import transactional
from content_service.utils.audit import log_action
from content_service.domain.lifecycle.page import assert_page_transition


def publish_page(
    *,
    page_id: str,
    actor_id: str,
) -> Page:
    """
    Publishes a page.

    Lifecycle only: the version counter is untouched and no snapshot is taken.
    """

    # 1️⃣ Fetch page with row-level lock
    page = lock_page(page_id)

    with transactional():
        # 2️⃣ Lifecycle transition enforcement
        assert_page_transition(from_status=page.status, to_status="published")

        # 3️⃣ Apply state change
        page.status = "published"
        page.published_at = utc_now()

        # 4️⃣ Audit logging
        log_action(
            action="page.publish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"version": page.version},
        )

    current_app.logger.info("Page published: %s", page_id)
    return page
