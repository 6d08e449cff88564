from typing import List, Optional

from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.lifecycle import PUBLISHED
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.page import Page
from blogcms.models.page_revision import PageRevision
from blogcms.utils.pagination import ListResult, apply_search, apply_sort, paginate
from ..visibility import can_view_unpublished

SORT_COLUMNS = {
    "created": Page.created_at,
    "updated": Page.updated_at,
    "title": Page.title,
    "menu": Page.menu_order,
}


def _visible_pages(actor: Optional[Actor]):
    query = Page.active()
    if not can_view_unpublished(actor):
        query = query.filter(Page.status == PUBLISHED)
    return query


def list_pages(
    *,
    actor: Optional[Actor],
    search: Optional[str] = None,
    status: Optional[str] = None,
    parent_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    query = _visible_pages(actor)

    query = apply_search(query, search, [Page.title, Page.excerpt, Page.content])
    if status:
        query = query.filter(Page.status == status.lower())
    if parent_id:
        query = query.filter(Page.parent_id == parent_id)

    query = apply_sort(
        query,
        columns=SORT_COLUMNS,
        sort_by=sort_by,
        sort_order=sort_order,
        default="created",
        tiebreaker=Page.id,
    )
    return paginate(query, page=page, limit=limit)


def get_page(page_id: str, actor: Optional[Actor]) -> Page:
    page = _visible_pages(actor).filter(Page.id == page_id).first()
    if not page:
        raise NotFoundError("Page not found")
    return page


def get_page_by_slug(slug: str, actor: Optional[Actor]) -> Page:
    page = _visible_pages(actor).filter(Page.slug == slug).first()
    if not page:
        raise NotFoundError("Page not found")
    return page


def list_revisions(page_id: str, actor: Actor) -> List[PageRevision]:
    """
    Newest first. Revisions of trashed pages remain listable; only a
    purged page has none.
    """
    require(actor, "page", "revisions")

    if not db.session.get(Page, page_id):
        raise NotFoundError("Page not found")

    return (
        PageRevision.query
        .filter_by(page_id=page_id)
        .order_by(PageRevision.version.desc())
        .all()
    )


def get_revision(page_id: str, revision_id: str, actor: Actor) -> PageRevision:
    require(actor, "page", "revisions")

    revision = PageRevision.query.filter_by(id=revision_id, page_id=page_id).first()
    if not revision:
        raise NotFoundError("Revision not found")
    return revision
