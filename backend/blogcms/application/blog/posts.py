from datetime import datetime
from typing import Any, Dict, Optional

from dateutil.parser import parse

from blogcms.domain.exceptions import NotFoundError, ValidationError
from blogcms.domain.lifecycle import (
    POST_STATUSES,
    POST_TYPES,
    PUBLISHED,
    normalize_status,
    published_at_for,
)
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.category import Category
from blogcms.models.post import Post
from blogcms.models.user import User
from blogcms.utils.activity import log_action
from blogcms.utils.pagination import ListResult, apply_search, apply_sort, paginate
from blogcms.utils.transaction import transactional
from ..validation import optional_bool, optional_str, required_str
from ..visibility import can_view_unpublished

SORT_COLUMNS = {
    "createdat": Post.created_at,
    "title": Post.title,
    "publishedat": Post.published_at,
    "viewcount": Post.view_count,
}

TEXT_FIELDS = {
    "content": ("content", None),
    "summary": ("summary", None),
    "imageUrl": ("image_url", 512),
    "externalUrl": ("external_url", 512),
    "externalSource": ("external_source", 100),
}


def _post_type(value: Optional[str]) -> str:
    post_type = (value or "update").strip().lower()
    if post_type not in POST_TYPES:
        raise ValidationError(f"Invalid post type '{value}'", errors={"type": sorted(POST_TYPES)})
    return post_type


def _tags(data: Dict[str, Any]) -> list:
    tags = data.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValidationError("'tags' must be a list of strings", errors={"tags": "list expected"})
    return [tag.strip() for tag in tags if tag.strip()]


def _ensure_category(category_id: Optional[str]) -> None:
    if category_id and not db.session.get(Category, category_id):
        raise NotFoundError("Category not found")


def _parse_date(value: Optional[str], name: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse(value)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid date for '{name}'") from exc


def list_posts(
    *,
    actor: Optional[Actor],
    search: Optional[str] = None,
    status: Optional[str] = None,
    post_type: Optional[str] = None,
    featured: Optional[bool] = None,
    user_id: Optional[str] = None,
    category_id: Optional[str] = None,
    tag: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    query = Post.query
    if not can_view_unpublished(actor):
        query = query.filter(Post.status == PUBLISHED)

    if status:
        query = query.filter(Post.status == status.lower())
    if post_type:
        query = query.filter(Post.type == post_type.lower())
    if featured is not None:
        query = query.filter(Post.featured == featured)
    if user_id:
        query = query.filter(Post.user_id == user_id)
    if category_id:
        query = query.filter(Post.category_id == category_id)
    if tag:
        # Tags are a JSON list; match the quoted element in its text form
        query = query.filter(db.cast(Post.tags, db.String).contains(f'"{tag}"'))

    start = _parse_date(date_from, "dateFrom")
    end = _parse_date(date_to, "dateTo")
    if start:
        query = query.filter(Post.created_at >= start)
    if end:
        query = query.filter(Post.created_at <= end)

    query = apply_search(query, search, [Post.title, Post.content, Post.summary])
    query = apply_sort(
        query,
        columns=SORT_COLUMNS,
        sort_by=sort_by,
        sort_order=sort_order,
        default="createdat",
        tiebreaker=Post.id,
    )
    return paginate(query, page=page, limit=limit)


def get_post(post_id: str, actor: Optional[Actor]) -> Post:
    """
    Published posts count the read: the post's view counter and its
    author's total views go up by one.
    """
    post = db.session.get(Post, post_id)
    if not post or (post.status != PUBLISHED and not can_view_unpublished(actor)):
        raise NotFoundError("Post not found")

    if post.status == PUBLISHED:
        with transactional():
            post.view_count = Post.view_count + 1
            db.session.query(User).filter(User.id == post.user_id).update(
                {User.total_views: User.total_views + 1}, synchronize_session=False
            )

    return post


REACTIONS = {
    "like": "like_count",
    "share": "share_count",
}


def react_to_post(*, actor: Actor, post_id: str, reaction: str) -> Post:
    """Like or share a published post."""
    require(actor, "post", "react")

    attr = REACTIONS.get(reaction)
    if attr is None:
        raise ValidationError(f"Unknown reaction '{reaction}'")

    post = db.session.get(Post, post_id)
    if not post or post.status != PUBLISHED:
        raise NotFoundError("Post not found")

    with transactional():
        setattr(post, attr, getattr(Post, attr) + 1)

        log_action(
            action=f"post.{reaction}",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
        )

    return post


def create_post(*, actor: Actor, data: Dict[str, Any]) -> Post:
    require(actor, "post", "create")

    title = required_str(data, "title", "Title", max_length=200)
    status = normalize_status(optional_str(data, "status"), POST_STATUSES)
    category_id = optional_str(data, "categoryId")
    _ensure_category(category_id)
    now = utcnow()

    post = Post()
    post.title = title
    post.user_id = actor.id
    post.category_id = category_id
    post.tags = _tags(data)
    post.type = _post_type(optional_str(data, "type"))
    post.status = status
    post.published_at = published_at_for(status, None, now)
    post.featured = bool(optional_bool(data, "featured"))
    allow_comments = optional_bool(data, "allowComments")
    post.allow_comments = True if allow_comments is None else allow_comments
    for key, (attr, max_length) in TEXT_FIELDS.items():
        setattr(post, attr, optional_str(data, key, max_length))
    post.content = post.content or ""

    with transactional():
        db.session.add(post)
        db.session.flush()

        author = db.session.get(User, actor.id)
        if author:
            author.posts_count = (author.posts_count or 0) + 1

        log_action(
            action="post.create",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={"title": post.title, "status": post.status},
        )

    return post


def update_post(*, actor: Actor, post_id: str, data: Dict[str, Any]) -> Post:
    post = db.session.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found")
    require(actor, "post", "edit", owner_id=post.user_id)

    title = optional_str(data, "title", max_length=200)
    if title is not None and not title.strip():
        raise ValidationError("Title cannot be empty", errors={"title": "required"})

    status = optional_str(data, "status")
    if status:
        status = normalize_status(status, POST_STATUSES)
    post_type = optional_str(data, "type")
    if post_type:
        post_type = _post_type(post_type)
    if "categoryId" in data:
        _ensure_category(optional_str(data, "categoryId"))
    tags = _tags(data) if "tags" in data else None
    featured = optional_bool(data, "featured")
    allow_comments = optional_bool(data, "allowComments")

    with transactional():
        if title is not None:
            post.title = title.strip()
        if status:
            post.status = status
            post.published_at = published_at_for(status, post.published_at, utcnow())
        if post_type:
            post.type = post_type
        if "categoryId" in data:
            post.category_id = data["categoryId"]
        if tags is not None:
            post.tags = tags
        if featured is not None:
            post.featured = featured
        if allow_comments is not None:
            post.allow_comments = allow_comments
        for key, (attr, max_length) in TEXT_FIELDS.items():
            if key in data:
                setattr(post, attr, optional_str(data, key, max_length))
        post.content = post.content or ""
        post.updated_at = utcnow()

        log_action(
            action="post.update",
            entity_type="post",
            entity_id=post.id,
            actor_id=actor.id,
            payload={"status": post.status},
        )

    return post


def delete_post(*, actor: Actor, post_id: str) -> None:
    """Hard delete; the post's comments go with it."""
    post = db.session.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found")
    require(actor, "post", "delete", owner_id=post.user_id)

    with transactional():
        author = db.session.get(User, post.user_id)
        if author and author.posts_count:
            author.posts_count -= 1

        db.session.delete(post)

        log_action(
            action="post.delete",
            entity_type="post",
            entity_id=post_id,
            actor_id=actor.id,
        )
