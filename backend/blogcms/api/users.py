from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.users.accounts import (
    administer_user,
    create_user,
    get_user,
    list_users,
    update_profile,
)
from blogcms.application.admin.activity import list_own_activity
from blogcms.domain.policy import can
from blogcms.normalizers.activity import normalize_activity
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.normalizers.user import normalize_user
from blogcms.utils.decorators import current_actor, optional_actor, permission_required
from blogcms.utils.pagination import pagination_args
from .args import json_body, sort_args
from . import api_bp


@api_bp.route("/users", methods=["GET"])
def users_list():
    page, limit = pagination_args()
    sort_by, sort_order = sort_args()

    result = list_users(
        search=request.args.get("search"),
        role=request.args.get("role"),
        specialization=request.args.get("specialization"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_user))


@api_bp.route("/users", methods=["POST"])
@jwt_required()
@permission_required("user", "create")
def users_create():
    user = create_user(actor=current_actor(), data=json_body())
    return jsonify(normalize_user(user, private=True)), 201


@api_bp.route("/users/profile", methods=["PUT"])
@jwt_required()
def users_update_profile():
    user = update_profile(actor=current_actor(), data=json_body())
    return jsonify(normalize_user(user, private=True))


@api_bp.route("/users/<user_id>", methods=["GET"])
@jwt_required(optional=True)
def users_get(user_id):
    actor = optional_actor()
    user = get_user(user_id)
    private = actor is not None and (actor.id == user.id or can(actor, "user", "manage"))
    return jsonify(normalize_user(user, private=private))


@api_bp.route("/users/<user_id>", methods=["PATCH"])
@jwt_required()
@permission_required("user", "manage")
def users_administer(user_id):
    user = administer_user(actor=current_actor(), user_id=user_id, data=json_body())
    return jsonify(normalize_user(user, private=True))


@api_bp.route("/users/activities", methods=["GET"])
@jwt_required()
def users_activities():
    page, limit = pagination_args()
    result = list_own_activity(actor=current_actor(), page=page, limit=limit)
    return jsonify(normalize_pagination(result, normalize_activity))
