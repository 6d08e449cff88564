from typing import Optional

from flask import g, has_request_context, request
from blogcms.extensions import db
from blogcms.models.activity_log import ActivityLog


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    """
    Queue an activity record on the current session; it is committed (or
    rolled back) together with the unit of work that produced it.
    """
    log = ActivityLog()

    log.actor_id = actor_id or (g.get("actor_id") if has_request_context() else None)
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    if has_request_context():
        log.request_path = request.path
        log.http_method = request.method
        log.ip_address = request.remote_addr
        log.user_agent = (request.headers.get("User-Agent") or "")[:512]

    db.session.add(log)
    return log
