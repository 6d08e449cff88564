from blogcms.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin


class Page(BaseModel, SoftDeleteMixin):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    content = db.Column(db.Text, nullable=False, default="")
    excerpt = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    parent_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)
    menu_order = db.Column(db.Integer, nullable=False, default=0)
    template = db.Column(db.String(100), nullable=True)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    featured_media_id = db.Column(
        db.String(36),
        db.ForeignKey("media_items.id", ondelete="SET NULL"),
        nullable=True,
    )

    seo_title = db.Column(db.String(200), nullable=True)
    seo_description = db.Column(db.String(500), nullable=True)
    meta_json = db.Column(db.JSON(none_as_null=True), nullable=True)

    revisions = db.relationship(
        "PageRevision",
        back_populates="page",
        order_by="PageRevision.version.desc()",
        cascade="all, delete-orphan",
    )
