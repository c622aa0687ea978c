from contextlib import contextmanager
from flask import current_app
from sqlalchemy.orm.exc import StaleDataError
from content_service.extensions import db
from content_service.domain.exceptions import VersionConflict

@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Everything flushed inside the block is committed together or rolled back
    together. A version-guarded UPDATE that matched no row surfaces as
    VersionConflict.
    """
    try:
        yield
        db.session.commit()
    except StaleDataError as exc:
        db.session.rollback()
        current_app.logger.warning("Concurrent page write rejected: %s", exc)
        raise VersionConflict(
            "Page was modified by another request; reload it and retry"
        ) from exc
    except Exception:
        db.session.rollback()
        raise
