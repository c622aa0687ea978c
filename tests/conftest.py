import pytest
from flask_jwt_extended import create_access_token

from content_service import create_app
from content_service.extensions import db as _db

ACTOR = "user-1"


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Build an Authorization header for a user id and role."""
    def _headers(role="editor", user_id=ACTOR, **extra):
        token = create_access_token(
            identity=user_id,
            additional_claims={"role": role},
        )
        return {"Authorization": f"Bearer {token}", **extra}

    return _headers
