from typing import Optional
from flask import g
from careers.extensions import db
from careers.models.audit_log import AuditLog


def log_action(
    *,
    company_id: str,
    action: str,
    entity_type: str,
    entity_id: str,
    payload: Optional[dict] = None
) -> AuditLog:
    log = AuditLog()

    log.company_id = company_id
    log.actor_id = getattr(g, "current_actor_id", None)
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
    return log
