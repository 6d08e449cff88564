from typing import Optional

from flask import current_app

from blogcms.domain.policy import Actor


def can_view_unpublished(actor: Optional[Actor]) -> bool:
    """
    Whether the caller may read drafts and private content.

    DRAFT_VISIBILITY="authenticated" lets any signed-in caller see every
    non-trashed item; "staff" narrows that to editors and above.
    """
    if actor is None:
        return False
    if current_app.config.get("DRAFT_VISIBILITY", "authenticated") == "staff":
        return actor.is_staff
    return True
