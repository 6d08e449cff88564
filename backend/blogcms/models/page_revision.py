from sqlalchemy import event

from blogcms.extensions import db
from .base import BaseModel


class PageRevision(BaseModel):
    __tablename__ = "page_revisions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
    )
    version = db.Column(db.Integer, nullable=False)

    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    excerpt = db.Column(db.Text, nullable=True)
    change_summary = db.Column(db.String(500), nullable=True)

    created_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)

    page = db.relationship("Page", back_populates="revisions")

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_page_revision_version"),
        db.Index("idx_page_revision_page", "page_id"),
    )


@event.listens_for(PageRevision, "before_update")
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Page revisions are immutable")
