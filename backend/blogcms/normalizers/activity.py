# blogcms/normalizers/activity.py
from __future__ import annotations

from typing import Dict, Any
from blogcms.models.activity_log import ActivityLog
from . import iso


def normalize_activity(log: ActivityLog) -> Dict[str, Any]:
    """
    Normalizes an ActivityLog row into API-safe JSON.

    Notes:
    - entity_id is always serialized as string for consistency
    - payload is assumed to be JSON-serializable
    """
    return {
        "id": log.id,
        "actorId": log.actor_id,
        "action": log.action,
        "entityType": log.entity_type,
        "entityId": str(log.entity_id) if log.entity_id is not None else None,
        "payload": log.payload or {},
        "requestPath": log.request_path,
        "httpMethod": log.http_method,
        "ipAddress": log.ip_address,
        "userAgent": log.user_agent,
        "createdAt": iso(log.created_at),
    }
