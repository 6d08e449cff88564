from typing import Any, Dict

from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.lifecycle import Lifecycle
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.media_item import MediaItem
from blogcms.models.page import Page
from blogcms.utils.activity import log_action
from blogcms.utils.media import delete_file
from blogcms.utils.transaction import transactional
from ..validation import optional_str

EDITABLE_FIELDS = {
    "title": ("title", 255),
    "altText": ("alt_text", 255),
    "caption": ("caption", None),
    "description": ("description", None),
}


def _get_active_media(media_id: str) -> MediaItem:
    media = MediaItem.active().filter_by(id=media_id).first()
    if not media:
        raise NotFoundError("Media not found")
    return media


def update_media(*, actor: Actor, media_id: str, data: Dict[str, Any]) -> MediaItem:
    media = _get_active_media(media_id)
    require(actor, "media", "edit", owner_id=media.uploaded_by)

    changed_fields = []

    with transactional():
        for key, (attr, max_length) in EDITABLE_FIELDS.items():
            value = optional_str(data, key, max_length)
            if value is not None and getattr(media, attr) != value:
                setattr(media, attr, value)
                changed_fields.append(attr)

        media.updated_at = utcnow()

        log_action(
            action="media.update",
            entity_type="media",
            entity_id=media.id,
            actor_id=actor.id,
            payload={"fields": changed_fields},
        )

    return media


def trash_media(*, actor: Actor, media_id: str) -> None:
    media = _get_active_media(media_id)
    require(actor, "media", "trash", owner_id=media.uploaded_by)

    with transactional():
        media.trash()

        log_action(
            action="media.trash",
            entity_type="media",
            entity_id=media.id,
            actor_id=actor.id,
            payload={"lifecycle": Lifecycle.TRASHED.value},
        )


def purge_media(*, actor: Actor, media_id: str) -> None:
    """
    Remove the row first, then the files. File removal is best effort:
    failures are logged and the purge still succeeds.
    """
    media = db.session.get(MediaItem, media_id)
    if not media:
        raise NotFoundError("Media not found")
    require(actor, "media", "purge", owner_id=media.uploaded_by)

    paths = [media.storage_path, media.thumbnail_path]

    with transactional():
        for page in Page.query.filter_by(featured_media_id=media.id).all():
            page.featured_media_id = None

        db.session.delete(media)

        log_action(
            action="media.purge",
            entity_type="media",
            entity_id=media_id,
            actor_id=actor.id,
            payload={"lifecycle": Lifecycle.PURGED.value},
        )

    for path in paths:
        delete_file(path)
