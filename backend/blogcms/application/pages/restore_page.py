from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.policy import Actor, require
from blogcms.models.base import utcnow
from blogcms.models.page import Page
from blogcms.models.page_revision import PageRevision
from blogcms.utils.activity import log_action
from blogcms.utils.transaction import retry_on_conflict, transactional
from blogcms.utils.versioning import next_version, snapshot_page
from .common import get_active_page


@retry_on_conflict
def restore_page(
    *,
    actor: Actor,
    page_id: str,
    revision_id: str,
) -> Page:
    """
    Copy a past revision's title, content and excerpt onto the live page.

    The restore is itself recorded as a new revision; the restored
    version number is never reused.
    """
    page = get_active_page(page_id)
    require(actor, "page", "restore", owner_id=page.author_id)

    source = PageRevision.query.filter_by(id=revision_id, page_id=page.id).first()
    if not source:
        raise NotFoundError("Revision not found")

    with transactional():
        page.title = source.title
        page.content = source.content
        page.excerpt = source.excerpt
        page.updated_at = utcnow()

        revision = snapshot_page(
            page,
            version=next_version(page.id),
            actor_id=actor.id,
            change_summary=f"Restore from v{source.version}",
        )

        log_action(
            action="page.restore",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor.id,
            payload={
                "from_version": source.version,
                "to_version": revision.version,
            },
        )

    return page
