import mimetypes
import os
from typing import Any, Dict, Optional

from flask import current_app
from werkzeug.datastructures import FileStorage

from blogcms.domain.exceptions import UnsupportedMediaTypeError, ValidationError
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.media_item import MediaItem
from blogcms.utils.activity import log_action
from blogcms.utils.media import allowed_file, create_thumbnail, delete_file, save_file
from blogcms.utils.transaction import transactional
from ..validation import optional_str


def upload_media(
    *,
    actor: Actor,
    file: Optional[FileStorage],
    data: Dict[str, Any],
) -> MediaItem:
    """
    Validate, store and register a single upload.

    Responsibilities:
    - MIME allow-list (extension fallback for octet-stream)
    - Date-partitioned storage with a random filename
    - Best-effort thumbnail for raster images
    - Activity logging
    """
    require(actor, "media", "upload")

    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    content_type = (file.mimetype or "").lower()
    if not allowed_file(content_type, file.filename):
        raise UnsupportedMediaTypeError(f"Unsupported file type: {content_type}")

    stored = save_file(file, utcnow(), content_type)
    if stored.size == 0:
        delete_file(stored.storage_path)
        raise ValidationError("No file uploaded")

    # The declared type is what passed the allow-list; the extension only
    # refines a generic octet-stream upload.
    mime_type = content_type
    if content_type == "application/octet-stream":
        mime_type = mimetypes.guess_type(stored.filename)[0] or content_type

    media = MediaItem()
    media.filename = stored.filename
    media.original_filename = file.filename
    media.mime_type = mime_type
    media.size = stored.size
    media.url = stored.url
    media.storage_path = stored.storage_path
    media.title = optional_str(data, "title", 255) or os.path.splitext(file.filename)[0]
    media.alt_text = optional_str(data, "altText", 255)
    media.caption = optional_str(data, "caption")
    media.description = optional_str(data, "description")
    media.uploaded_by = actor.id

    if media.is_raster_image:
        try:
            thumb_path, thumb_url, width, height = create_thumbnail(stored)
        except Exception as exc:
            # Upload still succeeds without a thumbnail
            current_app.logger.warning(
                "Thumbnail generation failed for %s: %s", stored.storage_path, exc
            )
        else:
            media.thumbnail_path = thumb_path
            media.thumbnail_url = thumb_url
            media.width = width
            media.height = height

    try:
        with transactional():
            db.session.add(media)
            db.session.flush()

            log_action(
                action="media.upload",
                entity_type="media",
                entity_id=media.id,
                actor_id=actor.id,
                payload={
                    "filename": media.filename,
                    "mime_type": media.mime_type,
                    "size": media.size,
                },
            )
    except Exception:
        delete_file(media.storage_path)
        delete_file(media.thumbnail_path)
        raise

    return media
