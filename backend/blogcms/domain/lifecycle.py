from datetime import datetime
from enum import Enum
from typing import Optional, Set

from .exceptions import ValidationError

PAGE_STATUSES: Set[str] = {"draft", "published", "private"}
POST_STATUSES: Set[str] = {"draft", "published", "archived"}
POST_TYPES: Set[str] = {"update", "announcement", "quick", "social"}

PUBLISHED = "published"


class Lifecycle(str, Enum):
    """Tombstone-then-purge states of trashable content."""

    ACTIVE = "active"
    TRASHED = "trashed"
    PURGED = "purged"


def normalize_status(value: Optional[str], allowed: Set[str], default: str = "draft") -> str:
    status = (value or default).strip().lower()
    if status not in allowed:
        raise ValidationError(
            f"Invalid status '{value}'",
            errors={"status": sorted(allowed)},
        )
    return status


def published_at_for(status: str, current: Optional[datetime], now: datetime) -> Optional[datetime]:
    """
    Publish timestamp rule shared by pages and posts.

    Entering "published" stamps the time once; any other status clears it.
    """
    if status == PUBLISHED:
        return current or now
    return None
