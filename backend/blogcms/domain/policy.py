from dataclasses import dataclass
from typing import Optional

from .exceptions import AuthorizationError

ROLES = ("subscriber", "contributor", "author", "editor", "admin", "superadmin")
DEFAULT_ROLE = "subscriber"

STAFF = frozenset({"editor", "admin", "superadmin"})
ADMINS = frozenset({"admin", "superadmin"})
AUTHORS = STAFF | {"author"}
EVERYONE = frozenset(ROLES)


@dataclass(frozen=True)
class Actor:
    id: str
    role: str

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF


@dataclass(frozen=True)
class Rule:
    any: frozenset
    own: frozenset = frozenset()


# (resource, action) -> roles allowed on any resource / only on their own
POLICY: dict[tuple[str, str], Rule] = {
    ("page", "create"): Rule(any=AUTHORS),
    ("page", "edit"): Rule(any=STAFF, own=frozenset({"author"})),
    ("page", "restore"): Rule(any=STAFF, own=frozenset({"author"})),
    ("page", "revisions"): Rule(any=AUTHORS),
    ("page", "trash"): Rule(any=STAFF),
    ("page", "purge"): Rule(any=ADMINS),
    ("media", "upload"): Rule(any=AUTHORS),
    ("media", "list"): Rule(any=AUTHORS),
    ("media", "edit"): Rule(any=STAFF, own=frozenset({"author"})),
    ("media", "trash"): Rule(any=STAFF, own=frozenset({"author"})),
    ("media", "purge"): Rule(any=STAFF, own=frozenset({"author"})),
    ("post", "create"): Rule(any=AUTHORS),
    ("post", "edit"): Rule(any=STAFF, own=frozenset({"author"})),
    ("post", "delete"): Rule(any=STAFF, own=frozenset({"author"})),
    ("post", "react"): Rule(any=EVERYONE),
    ("comment", "create"): Rule(any=EVERYONE),
    ("comment", "edit"): Rule(any=STAFF, own=EVERYONE),
    ("comment", "delete"): Rule(any=STAFF, own=EVERYONE),
    ("comment", "moderate"): Rule(any=STAFF),
    ("category", "manage"): Rule(any=STAFF),
    ("user", "create"): Rule(any=STAFF),
    ("user", "manage"): Rule(any=ADMINS),
    ("activity", "view"): Rule(any=ADMINS),
    ("dashboard", "view"): Rule(any=ADMINS),
    ("newsletter", "manage"): Rule(any=ADMINS),
}


def may_attempt(role: Optional[str], resource: str, action: str) -> bool:
    """True if the role could perform the action on at least some resource."""
    rule = POLICY[(resource, action)]
    return role in rule.any or role in rule.own


def can(actor: Actor, resource: str, action: str, owner_id: Optional[str] = None) -> bool:
    rule = POLICY[(resource, action)]
    if actor.role in rule.any:
        return True
    return owner_id is not None and owner_id == actor.id and actor.role in rule.own


def require(actor: Actor, resource: str, action: str, owner_id: Optional[str] = None) -> None:
    if not can(actor, resource, action, owner_id):
        raise AuthorizationError(f"Not allowed to {action} this {resource}")
