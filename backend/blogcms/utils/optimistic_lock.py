from datetime import timezone
from typing import Optional

from dateutil.parser import parse

from blogcms.domain.exceptions import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity, if_unmodified_since: Optional[str]):
    """
    Enforces optimistic locking using the If-Unmodified-Since header value.
    Raises ConflictError if the entity has been modified since.
    """
    if not if_unmodified_since or entity.updated_at is None:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(if_unmodified_since))
    except (ValueError, OverflowError) as exc:
        raise ValidationError("Invalid If-Unmodified-Since header") from exc

    # HTTP dates carry whole seconds only
    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        raise ConflictError("Conflict detected. Resource has been modified.")
