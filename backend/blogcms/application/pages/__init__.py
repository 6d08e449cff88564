from .create_page import create_page
from .update_page import update_page
from .restore_page import restore_page
from .delete_page import trash_page, purge_page
from .queries import (
    list_pages,
    get_page,
    get_page_by_slug,
    list_revisions,
    get_revision,
)

__all__ = [
    "create_page",
    "update_page",
    "restore_page",
    "trash_page",
    "purge_page",
    "list_pages",
    "get_page",
    "get_page_by_slug",
    "list_revisions",
    "get_revision",
]
