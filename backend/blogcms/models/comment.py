from blogcms.extensions import db
from .base import BaseModel


class Comment(BaseModel):
    __tablename__ = "comments"

    post_id = db.Column(db.String(36), db.ForeignKey("posts.id"), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("comments.id", ondelete="SET NULL"), nullable=True, index=True)
    content = db.Column(db.Text, nullable=False)
    is_approved = db.Column(db.Boolean, nullable=False, default=True, index=True)

    post = db.relationship("Post", back_populates="comments")
    author = db.relationship("User")
