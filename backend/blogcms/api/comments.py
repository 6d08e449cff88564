from functools import partial

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.blog.comments import (
    create_comment,
    delete_comment,
    list_comments_for_moderation,
    list_post_comments,
    reply_to_comment,
    set_comment_approval,
    update_comment,
)
from blogcms.normalizers.comment import normalize_comment
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.decorators import current_actor, permission_required
from blogcms.utils.pagination import pagination_args
from .args import json_body
from . import api_bp


@api_bp.route("/posts/<post_id>/comments", methods=["GET"])
def comments_for_post(post_id):
    page, limit = pagination_args()
    result = list_post_comments(post_id, page=page, limit=limit)
    return jsonify(normalize_pagination(result, normalize_comment))


@api_bp.route("/comments", methods=["POST"])
@jwt_required()
@permission_required("comment", "create")
def comments_create():
    comment = create_comment(actor=current_actor(), data=json_body())
    return jsonify(normalize_comment(comment)), 201


@api_bp.route("/comments/<comment_id>", methods=["PUT"])
@jwt_required()
@permission_required("comment", "edit")
def comments_update(comment_id):
    comment = update_comment(actor=current_actor(), comment_id=comment_id, data=json_body())
    return jsonify(normalize_comment(comment))


@api_bp.route("/comments/<comment_id>", methods=["DELETE"])
@jwt_required()
@permission_required("comment", "delete")
def comments_delete(comment_id):
    delete_comment(actor=current_actor(), comment_id=comment_id)
    return jsonify({"message": "Comment deleted successfully"}), 200


# ------------------------
# Moderation
# ------------------------

@api_bp.route("/comments", methods=["GET"])
@jwt_required()
@permission_required("comment", "moderate")
def comments_moderation_list():
    page, limit = pagination_args()
    result = list_comments_for_moderation(
        actor=current_actor(),
        post_id=request.args.get("postId"),
        status=request.args.get("status"),
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, partial(normalize_comment, admin=True)))


@api_bp.route("/comments/pending", methods=["GET"])
@jwt_required()
@permission_required("comment", "moderate")
def comments_pending():
    page, limit = pagination_args()
    result = list_comments_for_moderation(
        actor=current_actor(), status="pending", page=page, limit=limit
    )
    return jsonify(normalize_pagination(result, partial(normalize_comment, admin=True)))


@api_bp.route("/comments/<comment_id>/approve", methods=["POST"])
@jwt_required()
@permission_required("comment", "moderate")
def comments_approve(comment_id):
    comment = set_comment_approval(actor=current_actor(), comment_id=comment_id, approved=True)
    return jsonify(normalize_comment(comment, admin=True))


@api_bp.route("/comments/<comment_id>/unapprove", methods=["POST"])
@jwt_required()
@permission_required("comment", "moderate")
def comments_unapprove(comment_id):
    comment = set_comment_approval(actor=current_actor(), comment_id=comment_id, approved=False)
    return jsonify(normalize_comment(comment, admin=True))


@api_bp.route("/comments/<comment_id>/reply", methods=["POST"])
@jwt_required()
@permission_required("comment", "moderate")
def comments_reply(comment_id):
    reply = reply_to_comment(actor=current_actor(), comment_id=comment_id, data=json_body())
    return jsonify(normalize_comment(reply, admin=True)), 201
