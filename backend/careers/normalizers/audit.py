# careers/normalizers/audit.py
from __future__ import annotations

from typing import Any, Dict
from careers.models.audit_log import AuditLog
from .timestamps import isoformat


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "company_id": log.company_id,
        "actor_id": log.actor_id,
        "action": log.action,
        "entity_type": log.entity_type,
        "entity_id": log.entity_id,
        "payload": log.payload or {},
        "created_at": isoformat(log.created_at),
    }
