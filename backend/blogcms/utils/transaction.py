from contextlib import contextmanager
from functools import wraps

from flask import current_app
from sqlalchemy.exc import IntegrityError

from blogcms.domain.exceptions import ConcurrentWriteError, ConflictError
from blogcms.extensions import db


@contextmanager
def transactional():
    """Context manager for database transactions."""
    try:
        yield
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConcurrentWriteError("The resource was modified concurrently, please retry") from exc
    except Exception:
        db.session.rollback()
        raise


def retry_on_conflict(fn):
    """
    Re-run a whole unit of work when a unique constraint rejected it.

    Check-then-insert steps (slug probing, next revision number) are
    re-evaluated on every attempt.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        attempts = current_app.config.get("CONFLICT_RETRY_ATTEMPTS", 3)
        for attempt in range(1, attempts + 1):
            try:
                return fn(*args, **kwargs)
            except ConcurrentWriteError:
                current_app.logger.warning(
                    "Write conflict in %s (attempt %d/%d)", fn.__name__, attempt, attempts
                )
                if attempt == attempts:
                    raise ConflictError("Could not complete the request due to a concurrent update")
    return wrapper
