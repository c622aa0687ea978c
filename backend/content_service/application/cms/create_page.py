import copy
from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from content_service.extensions import db
from content_service.models.page import Page, DEFAULT_CONTENT_TREE
from content_service.domain.exceptions import Conflict, NotFound, ValidationError
from content_service.domain.invariants.path import assert_title, resolve_path
from content_service.utils.audit import log_action
from content_service.utils.transaction import transactional


def create_page(
    *,
    title: str,
    actor_id: str,
    path: Optional[str] = None,
    content_tree: Optional[Dict[str, Any]] = None,
    seo: Optional[Dict[str, Any]] = None,
    is_template: bool = False,
    template_name: Optional[str] = None,
    parent_id: Optional[str] = None,
) -> Page:
    """
    Create a new CMS page in DRAFT state at version 1.

    Edge cases handled:
    - Path derived from the title when none is given
    - Path already claimed by another page
    - Unknown parent page
    """
    title = assert_title(title)
    path = resolve_path(title, path)

    if content_tree is not None and not isinstance(content_tree, dict):
        raise ValidationError("content_tree must be an object")
    if seo is not None and not isinstance(seo, dict):
        raise ValidationError("seo must be an object or null")

    if Page.query.filter_by(path=path).first():
        raise Conflict(f'A page with path "{path}" already exists')

    if parent_id is not None and db.session.get(Page, parent_id) is None:
        raise NotFound(f'Parent page with id "{parent_id}" not found')

    page = Page()
    page.title = title
    page.path = path
    page.status = "draft"
    page.version = 1
    page.position = 0
    page.content_tree = copy.deepcopy(
        content_tree if content_tree is not None else DEFAULT_CONTENT_TREE
    )
    page.seo = seo
    page.is_template = bool(is_template)
    page.template_name = template_name
    page.parent_id = parent_id
    page.created_by = actor_id

    try:
        with transactional():
            db.session.add(page)
            db.session.flush()  # ensures page.id is available

            log_action(
                action="page.create",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor_id,
                payload={
                    "title": page.title,
                    "path": page.path,
                    "status": page.status,
                },
            )

    except IntegrityError as exc:
        # Lost a race for the same path against a concurrent create
        current_app.logger.warning("Path %s claimed concurrently", path)
        raise Conflict(f'A page with path "{path}" already exists') from exc

    current_app.logger.info("Page created: %s (%s)", page.id, page.title)
    return page
