import uuid
from typing import Optional

from slugify import slugify

from blogcms.extensions import db


def normalize_slug(text: Optional[str]) -> str:
    """
    Lowercase, hyphen-separated, ASCII-only token. Falls back to a random
    8 character token when nothing usable is left.
    """
    base = slugify(text or "", max_length=180, word_boundary=True)
    return base or uuid.uuid4().hex[:8]


def generate_unique_slug(text: Optional[str], model, exclude_id: Optional[str] = None) -> str:
    """
    Check `model.slug` for collisions, suffixing -1, -2, ... until free.

    Every row counts, trashed ones included, because the unique index does.
    Not race-free: a concurrent insert can still win, which surfaces as an
    IntegrityError at commit.
    """
    base = normalize_slug(text)

    def taken(candidate: str) -> bool:
        query = db.session.query(model.id).filter(model.slug == candidate)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    slug = base
    suffix = 1
    while taken(slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug
