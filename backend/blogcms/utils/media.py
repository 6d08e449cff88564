import mimetypes
import os
import uuid
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Optional, Tuple

from flask import current_app
from PIL import Image
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"}
ALLOWED_DOC_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/zip",
    "application/x-zip-compressed",
}
ALLOWED_VIDEO_TYPES = {"video/mp4", "video/webm", "video/ogg", "video/x-matroska", "video/quicktime"}
# Browsers often send these as application/octet-stream
ALLOWED_OCTET_EXTENSIONS = {".zip", ".mp4", ".webm", ".ogg", ".mkv", ".mov", ".pdf"}

PLACEHOLDER_SVG = (
    "<svg xmlns='http://www.w3.org/2000/svg' width='200' height='150'>"
    "<rect width='100%' height='100%' fill='#f1f5f9'/>"
    "<text x='50%' y='50%' dominant-baseline='middle' text-anchor='middle' "
    "fill='#475569' font-family='Arial' font-size='16'>Preview Unavailable</text></svg>"
)


@dataclass
class StoredFile:
    filename: str
    storage_path: str
    url: str
    directory: str
    url_directory: str
    size: int


def file_extension(filename: Optional[str]) -> str:
    return os.path.splitext(filename or "")[1].lower()


def allowed_file(content_type: Optional[str], filename: Optional[str]) -> bool:
    content_type = (content_type or "").lower()
    if content_type in ALLOWED_IMAGE_TYPES | ALLOWED_DOC_TYPES | ALLOWED_VIDEO_TYPES:
        return True
    return content_type == "application/octet-stream" and file_extension(filename) in ALLOWED_OCTET_EXTENSIONS


def upload_root() -> str:
    folder = current_app.config.get("UPLOAD_FOLDER", "uploads")
    if os.path.isabs(folder):
        return folder
    return os.path.join(current_app.instance_path, folder)


def stored_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """
    Extension for the stored copy. Static serving picks the Content-Type
    from it, so it must map to an allow-listed type.
    """
    ext = file_extension(secure_filename(filename or ""))
    content_type = (content_type or "").lower()
    if not content_type or content_type == "application/octet-stream":
        return ext
    guessed = mimetypes.guess_type(f"file{ext}")[0]
    if guessed == content_type or guessed in ALLOWED_IMAGE_TYPES | ALLOWED_DOC_TYPES | ALLOWED_VIDEO_TYPES:
        return ext
    return mimetypes.guess_extension(content_type) or ""


def save_file(file: FileStorage, now: datetime, content_type: Optional[str] = None) -> StoredFile:
    """
    Store an upload under <root>/yyyy/MM/ with a random name that keeps the
    original extension when it matches the content type.
    """
    relative_dir = f"{now:%Y}/{now:%m}"
    directory = os.path.join(upload_root(), now.strftime("%Y"), now.strftime("%m"))
    os.makedirs(directory, exist_ok=True)

    ext = stored_extension(file.filename, content_type)
    unique_filename = f"{uuid.uuid4().hex}{ext}"
    file_path = os.path.join(directory, unique_filename)

    file.save(file_path)

    url_directory = f"{current_app.config.get('MEDIA_URL_PREFIX', '/uploads')}/{relative_dir}"
    return StoredFile(
        filename=unique_filename,
        storage_path=file_path,
        url=f"{url_directory}/{unique_filename}",
        directory=directory,
        url_directory=url_directory,
        size=os.path.getsize(file_path),
    )


def create_thumbnail(stored: StoredFile) -> Tuple[str, str, int, int]:
    """
    Write a JPEG thumbnail next to the original, bounded by
    THUMBNAIL_MAX_SIZE with the aspect ratio preserved.

    Returns (thumbnail_path, thumbnail_url, original_width, original_height).
    """
    max_size = tuple(current_app.config.get("THUMBNAIL_MAX_SIZE", (400, 400)))
    stem = os.path.splitext(stored.filename)[0]
    thumb_name = f"thumb_{stem}.jpg"
    thumb_path = os.path.join(stored.directory, thumb_name)

    with Image.open(stored.storage_path) as img:
        width, height = img.size
        img.thumbnail(max_size, Image.Resampling.BICUBIC)
        img.convert("RGB").save(thumb_path, "JPEG", quality=80)

    return thumb_path, f"{stored.url_directory}/{thumb_name}", width, height


def render_thumbnail(storage_path: str) -> bytes:
    """On-the-fly thumbnail for items stored without one."""
    max_size = tuple(current_app.config.get("THUMBNAIL_MAX_SIZE", (400, 400)))
    output = BytesIO()
    with Image.open(storage_path) as img:
        img.thumbnail(max_size, Image.Resampling.BICUBIC)
        img.convert("RGB").save(output, "JPEG", quality=80)
    return output.getvalue()


def delete_file(file_path):
    """
    Remove a stored file. Failures are logged, never raised.
    """
    if not file_path:
        return False

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
