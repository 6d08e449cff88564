from blogcms.extensions import db
from blogcms.domain.lifecycle import Lifecycle
from .base import utcnow


class SoftDeleteMixin:
    is_deleted = db.Column(db.Boolean, nullable=False, default=False, index=True)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def trash(self):
        self.is_deleted = True
        self.deleted_at = utcnow()

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.TRASHED if self.is_deleted else Lifecycle.ACTIVE

    @classmethod
    def active(cls):
        """Default query scope: trashed rows are invisible."""
        return cls.query.filter_by(is_deleted=False)
