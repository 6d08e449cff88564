from blogcms.extensions import db
from .base import BaseModel


class Post(BaseModel):
    __tablename__ = "posts"

    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    summary = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey("categories.id"), nullable=True, index=True)
    tags = db.Column(db.JSON, nullable=False, default=list)

    type = db.Column(db.String(20), nullable=False, default="update")
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    featured = db.Column(db.Boolean, nullable=False, default=False)
    allow_comments = db.Column(db.Boolean, nullable=False, default=True)

    view_count = db.Column(db.Integer, nullable=False, default=0)
    like_count = db.Column(db.Integer, nullable=False, default=0)
    share_count = db.Column(db.Integer, nullable=False, default=0)

    external_url = db.Column(db.String(512), nullable=True)
    external_source = db.Column(db.String(100), nullable=True)

    author = db.relationship("User")
    category = db.relationship("Category")
    comments = db.relationship("Comment", back_populates="post", cascade="all, delete-orphan")
