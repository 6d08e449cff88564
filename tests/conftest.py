"""Shared fixtures: an app on in-memory SQLite, users per role and their tokens."""

import itertools
from io import BytesIO

import pytest
from flask_jwt_extended import create_access_token
from PIL import Image

from blogcms import create_app
from blogcms.extensions import db as _db
from blogcms.models.user import User


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", {"UPLOAD_FOLDER": str(tmp_path / "uploads")})

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make(role="author", email=None, password="password123", is_active=True):
        n = next(counter)
        user = User()
        user.email = email or f"{role}{n}@example.com"
        user.set_password(password)
        user.first_name = role.title()
        user.last_name = str(n)
        user.name = f"{user.first_name} {user.last_name}"
        user.role = role
        user.is_active = is_active
        _db.session.add(user)
        _db.session.commit()
        return user

    return _make


@pytest.fixture
def headers_for(app):
    def _headers(user):
        token = create_access_token(identity=user.id, additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def author(make_user):
    return make_user("author")


@pytest.fixture
def editor(make_user):
    return make_user("editor")


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def subscriber(make_user):
    return make_user("subscriber")


@pytest.fixture
def png_bytes():
    def _png(size=(800, 600), color=(200, 30, 30)):
        buffer = BytesIO()
        Image.new("RGB", size, color).save(buffer, "PNG")
        return buffer.getvalue()

    return _png
