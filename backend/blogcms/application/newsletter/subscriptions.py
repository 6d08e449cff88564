import re
from typing import Optional

from blogcms.domain.exceptions import ValidationError
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.newsletter_subscriber import NewsletterSubscriber
from blogcms.utils.activity import log_action
from blogcms.utils.pagination import ListResult, apply_search, paginate
from blogcms.utils.transaction import retry_on_conflict, transactional

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@retry_on_conflict
def subscribe(email: Optional[str]) -> NewsletterSubscriber:
    """
    Idempotent: subscribing twice returns the existing row, reactivating
    it if it had been switched off.
    """
    email = (email or "").strip().lower()
    if not email:
        raise ValidationError("Email is required", errors={"email": "required"})
    if len(email) > 255 or not EMAIL_RE.match(email):
        raise ValidationError("Email is invalid", errors={"email": "invalid"})

    subscriber = NewsletterSubscriber.query.filter_by(email=email).first()

    with transactional():
        if subscriber is None:
            subscriber = NewsletterSubscriber()
            subscriber.email = email
            subscriber.is_active = True
            db.session.add(subscriber)
            db.session.flush()
            action = "newsletter.subscribe"
        elif not subscriber.is_active:
            subscriber.is_active = True
            action = "newsletter.resubscribe"
        else:
            return subscriber

        log_action(
            action=action,
            entity_type="newsletter_subscriber",
            entity_id=subscriber.id,
        )

    return subscriber


def list_subscribers(
    *,
    actor: Actor,
    search: Optional[str] = None,
    active: Optional[bool] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    require(actor, "newsletter", "manage")

    query = apply_search(NewsletterSubscriber.query, search, [NewsletterSubscriber.email])
    if active is not None:
        query = query.filter(NewsletterSubscriber.is_active.is_(active))

    query = query.order_by(NewsletterSubscriber.created_at.desc(), NewsletterSubscriber.id.desc())
    return paginate(query, page=page, limit=limit)
