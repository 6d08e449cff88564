from typing import Optional

from blogcms.domain.policy import Actor, require
from blogcms.models.activity_log import ActivityLog
from blogcms.utils.pagination import ListResult, paginate


def list_activity(
    *,
    actor: Actor,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    require(actor, "activity", "view")

    query = ActivityLog.query

    if action:
        query = query.filter(ActivityLog.action == action)
    if entity_type:
        query = query.filter(ActivityLog.entity_type == entity_type)
    if entity_id:
        query = query.filter(ActivityLog.entity_id == entity_id)
    if actor_id:
        query = query.filter(ActivityLog.actor_id == actor_id)

    query = query.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
    return paginate(query, page=page, limit=limit)


def list_own_activity(*, actor: Actor, page: int = 1, limit: int = 20) -> ListResult:
    """The caller's own activity feed, newest first."""
    query = (
        ActivityLog.query
        .filter(ActivityLog.actor_id == actor.id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
    )
    return paginate(query, page=page, limit=limit)
