from typing import Optional

from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.hierarchy import assert_no_cycle
from blogcms.extensions import db
from blogcms.models.media_item import MediaItem
from blogcms.models.page import Page


def get_active_page(page_id: str) -> Page:
    page = Page.active().filter_by(id=page_id).first()
    if not page:
        raise NotFoundError("Page not found")
    return page


def ensure_parent(parent_id: str, page_id: Optional[str] = None) -> None:
    if not Page.active().filter_by(id=parent_id).first():
        raise NotFoundError("Parent page not found")

    def parent_of(node_id: str) -> Optional[str]:
        return db.session.query(Page.parent_id).filter(Page.id == node_id).scalar()

    assert_no_cycle(page_id, parent_id, parent_of)


def ensure_media(media_id: str) -> None:
    if not MediaItem.active().filter_by(id=media_id).first():
        raise NotFoundError("Featured media not found")
