from blogcms.extensions import db
from .base import BaseModel


class NewsletterSubscriber(BaseModel):
    __tablename__ = "newsletter_subscribers"

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
