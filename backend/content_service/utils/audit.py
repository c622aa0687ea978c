from content_service.extensions import db
from content_service.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    actor_id: Optional[str],
    payload: dict | None = None
):
    """Queue an audit row on the current session; committed with the mutation."""
    log = AuditLog()

    log.actor_id = actor_id or "system"
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
    return log
