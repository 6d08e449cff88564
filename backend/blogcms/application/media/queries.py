from typing import Optional

from blogcms.domain.exceptions import NotFoundError
from blogcms.models.media_item import MediaItem
from blogcms.utils.pagination import ListResult, apply_search, apply_sort, paginate

SORT_COLUMNS = {
    "created": MediaItem.created_at,
    "title": MediaItem.title,
    "size": MediaItem.size,
}


def list_media(
    *,
    search: Optional[str] = None,
    mime_type: Optional[str] = None,
    uploaded_by: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    query = MediaItem.active()

    query = apply_search(
        query,
        search,
        [MediaItem.title, MediaItem.description, MediaItem.original_filename],
    )
    if mime_type:
        query = query.filter(MediaItem.mime_type.startswith(mime_type.lower()))
    if uploaded_by:
        query = query.filter(MediaItem.uploaded_by == uploaded_by)

    query = apply_sort(
        query,
        columns=SORT_COLUMNS,
        sort_by=sort_by,
        sort_order=sort_order,
        default="created",
        tiebreaker=MediaItem.id,
    )
    return paginate(query, page=page, limit=limit)


def get_media(media_id: str) -> MediaItem:
    media = MediaItem.active().filter_by(id=media_id).first()
    if not media:
        raise NotFoundError("Media not found")
    return media
