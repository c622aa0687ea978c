import pytest

from content_service.application.cms.create_page import create_page
from content_service.application.cms.publish_page import publish_page
from content_service.application.cms.query_page import get_page
from content_service.application.cms.redirects import resolve_redirect
from content_service.application.cms.rollback_page import rollback_page
from content_service.application.cms.update_page import update_page
from content_service.application.cms.versions import get_version_by_number, list_versions
from content_service.domain.exceptions import NotFound, VersionConflict
from content_service.models.audit_log import AuditLog
from content_service.models.page_version import PageVersion

from .conftest import ACTOR


def test_rollback_restores_content_as_new_version(app):
    page = create_page(title="Home", seo={"title": "v1"}, actor_id=ACTOR)
    update_page(
        page_id=page.id,
        actor_id=ACTOR,
        data={"title": "Home 2", "seo": {"title": "v2"}, "content_tree": {"root": {}}},
    )

    restored = rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)

    assert restored.version == 3
    assert restored.title == "Home"
    assert restored.seo == {"title": "v1"}
    assert restored.content_tree["root"]["componentId"] == "page-container"

    # the overwritten state is preserved as version 2
    snapshot = get_version_by_number(page.id, 2)
    assert snapshot.title == "Home 2"
    assert snapshot.seo == {"title": "v2"}


def test_rollback_keeps_path_and_status(app):
    page = create_page(title="Home", path="/home", actor_id=ACTOR)
    update_page(page_id=page.id, actor_id=ACTOR, data={"path": "/start"})
    publish_page(page_id=page.id, actor_id=ACTOR)

    restored = rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)

    assert restored.path == "/start"
    assert restored.status == "published"


def test_rolling_back_twice_yields_two_new_versions(app):
    page = create_page(title="Home", actor_id=ACTOR)
    update_page(page_id=page.id, actor_id=ACTOR, data={"title": "Home 2"})

    rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)
    again = rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)

    assert again.version == 4
    assert again.title == "Home"
    assert [v.version for v in list_versions(page_id=page.id).items] == [3, 2, 1]


def test_rollback_to_unknown_version(app):
    page = create_page(title="Home", actor_id=ACTOR)

    with pytest.raises(NotFound):
        rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)

    assert get_page(page.id).version == 1


def test_rollback_missing_page(app):
    with pytest.raises(NotFound):
        rollback_page(page_id="missing", rollback_version=1, actor_id=ACTOR)


def test_rollback_with_stale_expected_version(app):
    page = create_page(title="Home", actor_id=ACTOR)
    update_page(page_id=page.id, actor_id=ACTOR, data={"title": "Home 2"})

    with pytest.raises(VersionConflict):
        rollback_page(
            page_id=page.id,
            rollback_version=1,
            actor_id=ACTOR,
            expected_version=1,
        )

    assert get_page(page.id).title == "Home 2"


def test_rollback_is_audited(app):
    page = create_page(title="Home", actor_id=ACTOR)
    update_page(page_id=page.id, actor_id=ACTOR, data={"title": "Home 2"})
    rollback_page(page_id=page.id, rollback_version=1, actor_id=ACTOR)

    log = AuditLog.query.filter_by(entity_id=page.id, action="page.rollback").one()
    assert log.payload == {"restored_version": 1, "from_version": 2, "to_version": 3}


def test_page_history_end_to_end(app):
    page = create_page(title="Home", path="/a", actor_id=ACTOR)
    assert (page.version, page.status) == (1, "draft")

    update_page(
        page_id=page.id,
        actor_id=ACTOR,
        data={"title": "Home Page"},
        expected_version=1,
    )
    assert get_page(page.id).version == 2
    [v1] = PageVersion.query.filter_by(page_id=page.id).all()
    assert (v1.version, v1.title) == (1, "Home")

    publish_page(page_id=page.id, actor_id=ACTOR)
    page = get_page(page.id)
    assert (page.version, page.status) == (2, "published")
    assert PageVersion.query.filter_by(page_id=page.id).count() == 1

    update_page(
        page_id=page.id,
        actor_id=ACTOR,
        data={"path": "/a2"},
        expected_version=2,
    )
    page = get_page(page.id)
    assert (page.version, page.path, page.status) == (3, "/a2", "published")
    assert resolve_redirect("/a") == {"to_path": "/a2", "status_code": 301}
    [v2] = PageVersion.query.filter_by(page_id=page.id, version=2).all()
    assert (v2.title, v2.page_id) == ("Home Page", page.id)
    assert PageVersion.query.filter_by(page_id=page.id).count() == 2

    page = rollback_page(
        page_id=page.id,
        rollback_version=1,
        actor_id=ACTOR,
        expected_version=3,
    )
    assert page.version == 4
    assert page.title == "Home"
    assert page.path == "/a2"

    assert [v.version for v in list_versions(page_id=page.id).items] == [3, 2, 1]
    assert get_version_by_number(page.id, 3).title == "Home Page"
