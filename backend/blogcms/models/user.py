from werkzeug.security import generate_password_hash, check_password_hash
from blogcms.extensions import db
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    name = db.Column(db.String(200), nullable=False, default="")
    first_name = db.Column(db.String(100), nullable=False, default="")
    last_name = db.Column(db.String(100), nullable=False, default="")
    bio = db.Column(db.Text, nullable=False, default="")
    website = db.Column(db.String(255), nullable=True)
    twitter = db.Column(db.String(255), nullable=True)
    linkedin = db.Column(db.String(255), nullable=True)
    specialization = db.Column(db.String(255), nullable=True)

    role = db.Column(db.String(50), nullable=False, default="subscriber", index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    posts_count = db.Column(db.Integer, nullable=False, default=0)
    total_views = db.Column(db.Integer, nullable=False, default=0)
    last_active = db.Column(db.DateTime(timezone=True), nullable=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
