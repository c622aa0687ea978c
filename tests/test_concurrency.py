import pytest
import sqlalchemy as sa

from content_service.application.cms.create_page import create_page
from content_service.application.cms.query_page import get_page
from content_service.application.cms.rollback_page import rollback_page
from content_service.application.cms.update_page import update_page
from content_service.domain.exceptions import VersionConflict
from content_service.models.page import Page
from content_service.models.page_version import PageVersion
from content_service.models.redirect import Redirect

from .conftest import ACTOR


def test_second_writer_with_same_expected_version_loses(app):
    page = create_page(title="Home", actor_id=ACTOR)

    update_page(page_id=page.id, actor_id=ACTOR, data={"title": "A"}, expected_version=1)

    with pytest.raises(VersionConflict) as excinfo:
        update_page(page_id=page.id, actor_id=ACTOR, data={"title": "B"}, expected_version=1)

    assert excinfo.value.expected == 1
    assert excinfo.value.actual == 2
    page = get_page(page.id)
    assert (page.version, page.title) == (2, "A")
    assert PageVersion.query.filter_by(page_id=page.id).count() == 1


def test_matching_expected_version_is_accepted(app):
    page = create_page(title="Home", actor_id=ACTOR)

    updated = update_page(page_id=page.id, actor_id=ACTOR, data={"title": "A"}, expected_version=1)

    assert updated.version == 2


def test_write_against_stale_row_is_rejected_atomically(app, db):
    page = create_page(title="Home", path="/home", actor_id=ACTOR)
    page_id = page.id
    get_page(page_id)

    # Another writer bumps the row behind the session's back.
    db.session.execute(
        sa.update(Page.__table__)
        .where(Page.__table__.c.id == page_id)
        .values(version=2)
    )

    with pytest.raises(VersionConflict):
        update_page(page_id=page_id, actor_id=ACTOR, data={"path": "/moved"})

    assert PageVersion.query.filter_by(page_id=page_id).count() == 0
    assert Redirect.query.count() == 0
    assert get_page(page_id).path == "/home"


def test_rollback_against_stale_row_is_rejected(app, db):
    page = create_page(title="Home", actor_id=ACTOR)
    page_id = page.id
    update_page(page_id=page_id, actor_id=ACTOR, data={"title": "Home 2"})
    get_page(page_id)

    db.session.execute(
        sa.update(Page.__table__)
        .where(Page.__table__.c.id == page_id)
        .values(version=3)
    )

    with pytest.raises(VersionConflict):
        rollback_page(page_id=page_id, rollback_version=1, actor_id=ACTOR)

    page = get_page(page_id)
    assert (page.version, page.title) == (2, "Home 2")
    assert PageVersion.query.filter_by(page_id=page_id).count() == 1
