from .upload_media import upload_media
from .manage_media import update_media, trash_media, purge_media
from .queries import list_media, get_media

__all__ = [
    "upload_media",
    "update_media",
    "trash_media",
    "purge_media",
    "list_media",
    "get_media",
]
