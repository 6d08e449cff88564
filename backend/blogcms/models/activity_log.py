from sqlalchemy import event

from blogcms.extensions import db
from .base import BaseModel


class ActivityLog(BaseModel):
    __tablename__ = "activity_logs"

    __table_args__ = (
        db.Index("ix_activity_created", "created_at", "id"),
        db.Index("ix_activity_actor_action", "actor_id", "action"),
    )

    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=True, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)

    request_path = db.Column(db.String(512), nullable=True)
    http_method = db.Column(db.String(10), nullable=True)
    ip_address = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(512), nullable=True)


@event.listens_for(ActivityLog, "before_update")
@event.listens_for(ActivityLog, "before_delete")
def prevent_activity_mutation(mapper, connection, target):
    raise RuntimeError("Activity logs are immutable")
