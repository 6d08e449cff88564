from functools import wraps
from typing import Optional

from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity

from blogcms.domain.exceptions import AuthenticationError, AuthorizationError
from blogcms.domain.policy import Actor, may_attempt


def optional_actor() -> Optional[Actor]:
    """
    Caller identity from an already verified token, or None for anonymous
    requests. Use after @jwt_required(optional=True).
    """
    identity = get_jwt_identity()
    if identity is None:
        return None

    actor = Actor(id=str(identity), role=get_jwt().get("role", "subscriber"))
    g.actor_id = actor.id
    return actor


def current_actor() -> Actor:
    actor = optional_actor()
    if actor is None:
        raise AuthenticationError("Authentication required")
    return actor


def permission_required(resource: str, action: str):
    """
    Route-level gate: the caller's role must be able to perform the action
    on at least their own resources. Ownership is checked by the service.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            actor = current_actor()

            if not may_attempt(actor.role, resource, action):
                raise AuthorizationError("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator
