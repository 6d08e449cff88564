from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.lifecycle import Lifecycle
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.page import Page
from blogcms.utils.activity import log_action
from blogcms.utils.transaction import transactional


def trash_page(
    *,
    actor: Actor,
    page_id: str,
) -> None:
    """
    Soft-delete: the page disappears from every lookup and listing, its
    revisions stay. Trashing an already trashed page is a NotFoundError.
    """
    require(actor, "page", "trash")

    page = Page.active().filter_by(id=page_id).first()
    if not page:
        raise NotFoundError("Page not found")

    with transactional():
        page.trash()

        log_action(
            action="page.trash",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor.id,
            payload={"lifecycle": Lifecycle.TRASHED.value},
        )


def purge_page(
    *,
    actor: Actor,
    page_id: str,
) -> None:
    """
    Hard-delete a page (active or trashed) and all of its revisions.

    Notes:
    - Child pages are detached and become roots
    - Revisions go first via the relationship cascade, then the page row
    """
    require(actor, "page", "purge")

    page = db.session.get(Page, page_id)
    if not page:
        raise NotFoundError("Page not found")

    with transactional():
        for child in Page.query.filter_by(parent_id=page.id).all():
            child.parent_id = None

        revision_count = len(page.revisions)
        db.session.delete(page)

        log_action(
            action="page.purge",
            entity_type="page",
            entity_id=page_id,
            actor_id=actor.id,
            payload={
                "lifecycle": Lifecycle.PURGED.value,
                "revisions": revision_count,
            },
        )
