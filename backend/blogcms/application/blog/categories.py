from typing import Any, Dict, List

from blogcms.domain.exceptions import ConflictError, NotFoundError
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.category import Category
from blogcms.models.post import Post
from blogcms.utils.activity import log_action
from blogcms.utils.slug import generate_unique_slug
from blogcms.utils.transaction import retry_on_conflict, transactional
from ..validation import optional_str, required_str


def list_categories() -> List[Category]:
    return Category.query.order_by(Category.name.asc()).all()


def get_category(category_id: str) -> Category:
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category


def _ensure_unique_name(name: str, exclude_id: str | None = None) -> None:
    query = Category.query.filter(db.func.lower(Category.name) == name.lower())
    if exclude_id:
        query = query.filter(Category.id != exclude_id)
    if query.first():
        raise ConflictError("A category with this name already exists")


@retry_on_conflict
def create_category(*, actor: Actor, data: Dict[str, Any]) -> Category:
    require(actor, "category", "manage")

    name = required_str(data, "name", "Name", max_length=100)
    _ensure_unique_name(name)

    category = Category()
    category.name = name
    category.slug = generate_unique_slug(optional_str(data, "slug") or name, Category)
    category.description = optional_str(data, "description")

    with transactional():
        db.session.add(category)
        db.session.flush()

        log_action(
            action="category.create",
            entity_type="category",
            entity_id=category.id,
            actor_id=actor.id,
            payload={"name": category.name, "slug": category.slug},
        )

    return category


@retry_on_conflict
def update_category(*, actor: Actor, category_id: str, data: Dict[str, Any]) -> Category:
    require(actor, "category", "manage")
    category = get_category(category_id)

    name = optional_str(data, "name", max_length=100)
    slug = optional_str(data, "slug")

    if name is not None:
        name = required_str(data, "name", "Name", max_length=100)
        _ensure_unique_name(name, exclude_id=category.id)
    if slug and slug != category.slug:
        slug = generate_unique_slug(slug, Category, exclude_id=category.id)
    else:
        slug = None

    with transactional():
        if name is not None:
            category.name = name
        if slug is not None:
            category.slug = slug
        if "description" in data:
            category.description = optional_str(data, "description")

        log_action(
            action="category.update",
            entity_type="category",
            entity_id=category.id,
            actor_id=actor.id,
            payload={"name": category.name, "slug": category.slug},
        )

    return category


def delete_category(*, actor: Actor, category_id: str) -> None:
    """Posts in the category are kept and become uncategorized."""
    require(actor, "category", "manage")
    category = get_category(category_id)

    with transactional():
        for post in Post.query.filter_by(category_id=category.id).all():
            post.category_id = None

        db.session.delete(category)

        log_action(
            action="category.delete",
            entity_type="category",
            entity_id=category_id,
            actor_id=actor.id,
        )
