from typing import Any, Dict

from blogcms.domain.lifecycle import PAGE_STATUSES, normalize_status, published_at_for
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.page import Page
from blogcms.utils.activity import log_action
from blogcms.utils.slug import generate_unique_slug
from blogcms.utils.transaction import retry_on_conflict, transactional
from blogcms.utils.versioning import snapshot_page
from ..validation import optional_int, optional_str, required_str
from .common import ensure_media, ensure_parent


@retry_on_conflict
def create_page(
    *,
    actor: Actor,
    data: Dict[str, Any],
) -> Page:
    """
    Create a page together with its first revision.

    Edge cases handled:
    - Missing title
    - Unknown status
    - Missing parent or featured media
    - Slug collisions (suffixed) and slug races (retried)
    """
    require(actor, "page", "create")

    title = required_str(data, "title", "Title", max_length=200)
    status = normalize_status(optional_str(data, "status"), PAGE_STATUSES)
    parent_id = optional_str(data, "parentId")
    featured_media_id = optional_str(data, "featuredMediaId")
    menu_order = optional_int(data, "menuOrder")

    if parent_id:
        ensure_parent(parent_id)
    if featured_media_id:
        ensure_media(featured_media_id)

    slug = generate_unique_slug(optional_str(data, "slug") or title, Page)
    now = utcnow()

    page = Page()
    page.title = title
    page.slug = slug
    page.content = optional_str(data, "content") or ""
    page.excerpt = optional_str(data, "excerpt")
    page.status = status
    page.published_at = published_at_for(status, None, now)
    page.parent_id = parent_id
    page.menu_order = menu_order or 0
    page.template = optional_str(data, "template", max_length=100)
    page.author_id = actor.id
    page.featured_media_id = featured_media_id
    page.seo_title = optional_str(data, "seoTitle", max_length=200)
    page.seo_description = optional_str(data, "seoDescription", max_length=500)
    page.meta_json = data.get("metaJson")
    page.created_at = now
    page.updated_at = now

    change_summary = optional_str(data, "changeSummary", max_length=500) or "Initial version"

    with transactional():
        db.session.add(page)
        db.session.flush()  # ensures page.id is available

        revision = snapshot_page(
            page,
            version=1,
            actor_id=actor.id,
            change_summary=change_summary,
        )

        log_action(
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor.id,
            payload={
                "title": page.title,
                "slug": page.slug,
                "status": page.status,
                "version": revision.version,
            },
        )

    return page
