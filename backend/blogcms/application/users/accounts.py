from typing import Any, Dict, Optional, Tuple

from flask_jwt_extended import create_access_token

from blogcms.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from blogcms.domain.policy import ADMINS, DEFAULT_ROLE, ROLES, Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.user import User
from blogcms.utils.activity import log_action
from blogcms.utils.pagination import ListResult, apply_search, apply_sort, paginate
from blogcms.utils.transaction import transactional
from ..validation import optional_bool, optional_str, required_str

SORT_COLUMNS = {
    "joined": User.created_at,
    "name": User.name,
    "posts": User.posts_count,
    "views": User.total_views,
}

PROFILE_FIELDS = {
    "bio": ("bio", None),
    "website": ("website", 255),
    "twitter": ("twitter", 255),
    "linkedIn": ("linkedin", 255),
    "specialization": ("specialization", 255),
}


def _get_user(user_id: str) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _role(value: Optional[str]) -> str:
    """Unknown or missing roles fall back to the default role."""
    role = (value or "").strip().lower()
    return role if role in ROLES else DEFAULT_ROLE


def authenticate(*, data: Dict[str, Any]) -> Tuple[User, str]:
    email = required_str(data, "email", "Email", max_length=255)
    password = optional_str(data, "password")
    if not password:
        raise ValidationError("Password is required", errors={"password": "required"})

    user = User.query.filter_by(email=email.lower()).first()
    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        raise AuthenticationError("User account disabled")

    with transactional():
        user.last_active = utcnow()
        log_action(
            action="user.login",
            entity_type="user",
            entity_id=user.id,
            actor_id=user.id,
        )

    return user, issue_token(user)


def issue_token(user: User) -> str:
    return create_access_token(identity=user.id, additional_claims={"role": user.role})


def list_users(
    *,
    search: Optional[str] = None,
    role: Optional[str] = None,
    specialization: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    query = User.query.filter(User.is_active.is_(True))

    query = apply_search(
        query,
        search,
        [User.name, User.first_name, User.last_name, User.email, User.bio, User.specialization],
    )
    if role:
        query = query.filter(User.role == role.lower())
    if specialization:
        query = query.filter(User.specialization.ilike(f"%{specialization}%"))

    query = apply_sort(
        query,
        columns=SORT_COLUMNS,
        sort_by=sort_by,
        sort_order=sort_order,
        default="joined",
        tiebreaker=User.id,
    )
    return paginate(query, page=page, limit=limit)


def get_user(user_id: str) -> User:
    return _get_user(user_id)


def create_user(*, actor: Optional[Actor], data: Dict[str, Any]) -> User:
    """
    Staff create accounts; only administrators may hand out admin roles.
    `actor` is None when bootstrapping from the command line.
    """
    if actor is not None:
        require(actor, "user", "create")

    first_name = required_str(data, "firstName", "First name", max_length=100)
    last_name = required_str(data, "lastName", "Last name", max_length=100)
    email = required_str(data, "email", "Email", max_length=255).lower()
    password = required_str(data, "password", "Password")
    if "@" not in email:
        raise ValidationError("Email is invalid", errors={"email": "invalid"})
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters", errors={"password": "too short"})

    role = _role(optional_str(data, "role"))
    if actor is not None and role in ADMINS and actor.role not in ADMINS:
        raise AuthorizationError("Only administrators can grant administrative roles")

    if User.query.filter_by(email=email).first():
        raise ConflictError("User with this email already exists")

    user = User()
    user.email = email
    user.set_password(password)
    user.first_name = first_name
    user.last_name = last_name
    user.name = f"{first_name} {last_name}"
    user.role = role
    user.is_active = True
    user.last_active = utcnow()
    for key, (attr, max_length) in PROFILE_FIELDS.items():
        setattr(user, attr, optional_str(data, key, max_length))
    user.bio = user.bio or ""

    with transactional():
        db.session.add(user)
        db.session.flush()

        log_action(
            action="user.create",
            entity_type="user",
            entity_id=user.id,
            actor_id=actor.id if actor else None,
            payload={"email": user.email, "role": user.role},
        )

    return user


def update_profile(*, actor: Actor, data: Dict[str, Any]) -> User:
    user = _get_user(actor.id)

    first_name = optional_str(data, "firstName", 100)
    last_name = optional_str(data, "lastName", 100)

    with transactional():
        if first_name and first_name.strip():
            user.first_name = first_name.strip()
        if last_name and last_name.strip():
            user.last_name = last_name.strip()
        user.name = f"{user.first_name} {user.last_name}".strip()

        for key, (attr, max_length) in PROFILE_FIELDS.items():
            if key in data:
                setattr(user, attr, optional_str(data, key, max_length))
        user.bio = user.bio or ""
        user.last_active = utcnow()

        log_action(
            action="user.profile_update",
            entity_type="user",
            entity_id=user.id,
            actor_id=actor.id,
        )

    return user


def administer_user(*, actor: Actor, user_id: str, data: Dict[str, Any]) -> User:
    """Role changes and (de)activation."""
    require(actor, "user", "manage")
    user = _get_user(user_id)

    role = optional_str(data, "role")
    is_active = optional_bool(data, "isActive")

    if role is not None and role.strip().lower() not in ROLES:
        raise ValidationError(f"Invalid role '{role}'", errors={"role": list(ROLES)})
    if user.id == actor.id and (is_active is False or (role and role.lower() not in ADMINS)):
        raise ValidationError("Administrators cannot demote or deactivate themselves")

    with transactional():
        if role is not None:
            user.role = role.strip().lower()
        if is_active is not None:
            user.is_active = is_active

        log_action(
            action="user.administer",
            entity_type="user",
            entity_id=user.id,
            actor_id=actor.id,
            payload={"role": user.role, "is_active": user.is_active},
        )

    return user
