from blogcms.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin


class MediaItem(BaseModel, SoftDeleteMixin):
    __tablename__ = "media_items"

    filename = db.Column(db.String(255), nullable=False)
    original_filename = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(127), nullable=False, index=True)
    size = db.Column(db.BigInteger, nullable=False, default=0)

    width = db.Column(db.Integer, nullable=True)
    height = db.Column(db.Integer, nullable=True)

    url = db.Column(db.String(512), nullable=False)
    thumbnail_url = db.Column(db.String(512), nullable=True)
    storage_path = db.Column(db.String(1024), nullable=False)
    thumbnail_path = db.Column(db.String(1024), nullable=True)

    title = db.Column(db.String(255), nullable=False, default="")
    alt_text = db.Column(db.String(255), nullable=True)
    caption = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)

    uploaded_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)

    @property
    def is_raster_image(self) -> bool:
        return self.mime_type.startswith("image/") and "svg" not in self.mime_type
