import copy
from flask import current_app
from content_service.extensions import db
from content_service.models.page_version import PageVersion


def snapshot_page(page, actor_id):
    """
    Record the page's current title, content tree and SEO metadata as an
    immutable PageVersion keyed by the page's current version number.

    Purely additive: two calls against unchanged state give two rows.
    Must run inside the caller's transaction, before the page is mutated.
    """
    version = PageVersion()
    version.page_id = page.id
    version.version = page.version
    version.title = page.title
    version.content_tree = copy.deepcopy(page.content_tree)
    version.seo = copy.deepcopy(page.seo)
    version.created_by = actor_id

    db.session.add(version)

    current_app.logger.debug(
        "Version snapshot created for page %s (v%s)", page.id, page.version
    )
    return version
