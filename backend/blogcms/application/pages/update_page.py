from typing import Any, Dict, Optional

from blogcms.domain.exceptions import ValidationError
from blogcms.domain.lifecycle import PAGE_STATUSES, normalize_status, published_at_for
from blogcms.domain.policy import Actor, require
from blogcms.models.base import utcnow
from blogcms.models.page import Page
from blogcms.utils.activity import log_action
from blogcms.utils.optimistic_lock import enforce_optimistic_lock
from blogcms.utils.slug import generate_unique_slug
from blogcms.utils.transaction import retry_on_conflict, transactional
from blogcms.utils.versioning import next_version, snapshot_page
from ..validation import optional_int, optional_str
from .common import ensure_media, ensure_parent, get_active_page

# Nullable fields: a key that is present (even with null) is applied.
NULLABLE_FIELDS = {
    "excerpt": ("excerpt", None),
    "template": ("template", 100),
    "seoTitle": ("seo_title", 200),
    "seoDescription": ("seo_description", 500),
}


@retry_on_conflict
def update_page(
    *,
    actor: Actor,
    page_id: str,
    data: Dict[str, Any],
    if_unmodified_since: Optional[str] = None,
) -> Page:
    """
    Patch a page and append the next revision.

    Design rules:
    - Only fields present in `data` change; null leaves title, content,
      status and menuOrder untouched and clears nullable fields
    - A changed slug is re-resolved for uniqueness, excluding this page
    - Every successful call appends exactly one revision
    """
    page = get_active_page(page_id)
    require(actor, "page", "edit", owner_id=page.author_id)
    enforce_optimistic_lock(page, if_unmodified_since)

    title = optional_str(data, "title", max_length=200)
    if title is not None and not title.strip():
        raise ValidationError("Title cannot be empty", errors={"title": "required"})

    content = optional_str(data, "content")
    status = optional_str(data, "status")
    menu_order = optional_int(data, "menuOrder")
    requested_slug = optional_str(data, "slug")

    if "parentId" in data and data["parentId"] is not None:
        ensure_parent(optional_str(data, "parentId"), page.id)
    if "featuredMediaId" in data and data["featuredMediaId"] is not None:
        ensure_media(optional_str(data, "featuredMediaId"))

    new_slug = None
    if requested_slug and requested_slug.strip() and requested_slug != page.slug:
        new_slug = generate_unique_slug(requested_slug, Page, exclude_id=page.id)

    if status:
        status = normalize_status(status, PAGE_STATUSES)

    change_summary = optional_str(data, "changeSummary", max_length=500) or "Updated"
    now = utcnow()
    changed_fields: list[str] = []

    def assign(attr, value):
        if getattr(page, attr) != value:
            setattr(page, attr, value)
            changed_fields.append(attr)

    with transactional():
        if title is not None:
            assign("title", title.strip())
        if content is not None:
            assign("content", content)
        if new_slug is not None:
            assign("slug", new_slug)
        if status:
            assign("status", status)
            assign("published_at", published_at_for(status, page.published_at, now))
        if menu_order is not None:
            assign("menu_order", menu_order)

        for key, (attr, max_length) in NULLABLE_FIELDS.items():
            if key in data:
                assign(attr, optional_str(data, key, max_length))

        if "parentId" in data:
            assign("parent_id", data["parentId"])
        if "featuredMediaId" in data:
            assign("featured_media_id", data["featuredMediaId"])
        if "metaJson" in data:
            assign("meta_json", data["metaJson"])

        page.updated_at = now

        revision = snapshot_page(
            page,
            version=next_version(page.id),
            actor_id=actor.id,
            change_summary=change_summary,
        )

        log_action(
            action="page.update",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor.id,
            payload={
                "fields": changed_fields,
                "version": revision.version,
            },
        )

    return page
