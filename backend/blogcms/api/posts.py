from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.blog.posts import (
    create_post,
    delete_post,
    get_post,
    list_posts,
    react_to_post,
    update_post,
)
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.normalizers.post import normalize_post
from blogcms.utils.decorators import current_actor, optional_actor, permission_required
from blogcms.utils.pagination import pagination_args
from .args import bool_arg, json_body, sort_args
from . import api_bp


@api_bp.route("/posts", methods=["GET"])
@jwt_required(optional=True)
def posts_list():
    page, limit = pagination_args()
    sort_by, sort_order = sort_args()

    result = list_posts(
        actor=optional_actor(),
        search=request.args.get("search"),
        status=request.args.get("status"),
        post_type=request.args.get("type"),
        featured=bool_arg("featured"),
        user_id=request.args.get("userId"),
        category_id=request.args.get("categoryId"),
        tag=request.args.get("tag"),
        date_from=request.args.get("dateFrom"),
        date_to=request.args.get("dateTo"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_post))


@api_bp.route("/posts", methods=["POST"])
@jwt_required()
@permission_required("post", "create")
def posts_create():
    post = create_post(actor=current_actor(), data=json_body())
    return jsonify(normalize_post(post)), 201


@api_bp.route("/posts/<post_id>", methods=["GET"])
@jwt_required(optional=True)
def posts_get(post_id):
    return jsonify(normalize_post(get_post(post_id, optional_actor())))


@api_bp.route("/posts/<post_id>", methods=["PUT"])
@jwt_required()
@permission_required("post", "edit")
def posts_update(post_id):
    post = update_post(actor=current_actor(), post_id=post_id, data=json_body())
    return jsonify(normalize_post(post))


@api_bp.route("/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@permission_required("post", "delete")
def posts_delete(post_id):
    delete_post(actor=current_actor(), post_id=post_id)
    return jsonify({"message": "Post deleted successfully"}), 200


@api_bp.route("/posts/<post_id>/like", methods=["POST"])
@jwt_required()
@permission_required("post", "react")
def posts_like(post_id):
    post = react_to_post(actor=current_actor(), post_id=post_id, reaction="like")
    return jsonify({"message": "Post liked successfully", "likeCount": post.like_count}), 200


@api_bp.route("/posts/<post_id>/share", methods=["POST"])
@jwt_required()
@permission_required("post", "react")
def posts_share(post_id):
    post = react_to_post(actor=current_actor(), post_id=post_id, reaction="share")
    return jsonify({"message": "Post shared successfully", "shareCount": post.share_count}), 200
