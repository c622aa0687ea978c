# content_service/application/cms/redirects.py
from typing import Dict, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from content_service.extensions import db
from content_service.models.redirect import Redirect, REDIRECT_STATUS_CODES
from content_service.domain.exceptions import Conflict, NotFound, ValidationError
from content_service.domain.invariants.path import normalize_path
from content_service.utils.audit import log_action
from content_service.utils.pagination import paginate
from content_service.utils.transaction import transactional


def record_redirect(*, from_path: str, to_path: str, status_code: int = 301) -> Redirect:
    """
    Upsert keyed by from_path on the current session, without committing.

    An existing row for from_path is overwritten in place; chains are never
    followed or collapsed. Paths must already be normalized.
    """
    redirect = Redirect.query.filter_by(from_path=from_path).first()
    if redirect is None:
        redirect = Redirect()
        redirect.from_path = from_path
        db.session.add(redirect)

    redirect.to_path = to_path
    redirect.status_code = status_code
    return redirect


def upsert_redirect(
    *,
    from_path: str,
    to_path: str,
    status_code: int = 301,
    actor_id: Optional[str] = None,
) -> Redirect:
    """Administrative create-or-overwrite of a single-hop redirect."""
    if isinstance(status_code, bool) or status_code not in REDIRECT_STATUS_CODES:
        raise ValidationError("status_code must be 301 or 302")

    from_path = normalize_path(from_path)
    to_path = normalize_path(to_path)
    if from_path == to_path:
        raise ValidationError("A redirect cannot point at its own path")

    try:
        with transactional():
            redirect = record_redirect(
                from_path=from_path,
                to_path=to_path,
                status_code=status_code,
            )
            db.session.flush()  # ensures redirect.id is available

            log_action(
                action="redirect.upsert",
                entity_type="redirect",
                entity_id=redirect.id,
                actor_id=actor_id,
                payload={
                    "from_path": from_path,
                    "to_path": to_path,
                    "status_code": status_code,
                },
            )
    except IntegrityError as exc:
        raise Conflict(
            f'A redirect from "{from_path}" was created concurrently'
        ) from exc

    current_app.logger.info(
        "Redirect upserted: %s -> %s (%s)", from_path, to_path, status_code
    )
    return redirect


def resolve_redirect(path: str) -> Optional[Dict[str, object]]:
    """
    Exact, single-hop lookup. A -> B and B -> C does not resolve A to C.

    The path is matched as given, apart from surrounding whitespace; it is
    not normalized, so paths outside the page grammar simply miss.
    """
    redirect = Redirect.query.filter_by(from_path=path.strip()).first()
    if redirect is None:
        return None

    return {"to_path": redirect.to_path, "status_code": redirect.status_code}


def delete_redirect(*, redirect_id: str, actor_id: Optional[str] = None) -> None:
    redirect = db.session.get(Redirect, redirect_id)
    if not redirect:
        raise NotFound(f'Redirect with id "{redirect_id}" not found')

    with transactional():
        db.session.delete(redirect)

        log_action(
            action="redirect.delete",
            entity_type="redirect",
            entity_id=redirect_id,
            actor_id=actor_id,
            payload={"from_path": redirect.from_path},
        )

    current_app.logger.info("Redirect deleted: %s", redirect_id)


def list_redirects(*, page: Optional[int] = None, limit: Optional[int] = None):
    query = Redirect.query.order_by(Redirect.created_at.desc(), Redirect.id.desc())
    return paginate(query, page=page, limit=limit)
