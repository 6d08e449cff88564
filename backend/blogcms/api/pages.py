from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.pages import (
    create_page,
    get_page,
    get_page_by_slug,
    get_revision,
    list_pages,
    list_revisions,
    purge_page,
    restore_page,
    trash_page,
    update_page,
)
from blogcms.normalizers.page import normalize_page
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.normalizers.revision import normalize_revision
from blogcms.utils.decorators import current_actor, optional_actor, permission_required
from blogcms.utils.pagination import pagination_args
from .args import json_body, sort_args
from . import api_bp


# ------------------------
# Pages
# ------------------------

@api_bp.route("/pages", methods=["GET"])
@jwt_required(optional=True)
def pages_list():
    page, limit = pagination_args()
    sort_by, sort_order = sort_args()

    result = list_pages(
        actor=optional_actor(),
        search=request.args.get("search"),
        status=request.args.get("status"),
        parent_id=request.args.get("parentId"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_page))


@api_bp.route("/pages", methods=["POST"])
@jwt_required()
@permission_required("page", "create")
def pages_create():
    page = create_page(actor=current_actor(), data=json_body())
    return jsonify(normalize_page(page)), 201


@api_bp.route("/pages/slug/<slug>", methods=["GET"])
@jwt_required(optional=True)
def pages_get_by_slug(slug):
    return jsonify(normalize_page(get_page_by_slug(slug, optional_actor())))


@api_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required(optional=True)
def pages_get(page_id):
    return jsonify(normalize_page(get_page(page_id, optional_actor())))


@api_bp.route("/pages/<page_id>", methods=["PUT"])
@jwt_required()
@permission_required("page", "edit")
def pages_update(page_id):
    page = update_page(
        actor=current_actor(),
        page_id=page_id,
        data=json_body(),
        if_unmodified_since=request.headers.get("If-Unmodified-Since"),
    )
    return jsonify(normalize_page(page))


@api_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@permission_required("page", "trash")
def pages_trash(page_id):
    trash_page(actor=current_actor(), page_id=page_id)
    return jsonify({"message": "Page deleted successfully"}), 200


@api_bp.route("/pages/<page_id>/hard", methods=["DELETE"])
@jwt_required()
@permission_required("page", "purge")
def pages_purge(page_id):
    purge_page(actor=current_actor(), page_id=page_id)
    return jsonify({"message": "Page permanently deleted"}), 200


# ------------------------
# Revisions
# ------------------------

@api_bp.route("/pages/<page_id>/revisions", methods=["GET"])
@jwt_required()
@permission_required("page", "revisions")
def pages_revisions(page_id):
    revisions = list_revisions(page_id, current_actor())
    return jsonify([normalize_revision(rev) for rev in revisions])


@api_bp.route("/pages/<page_id>/revisions/<revision_id>", methods=["GET"])
@jwt_required()
@permission_required("page", "revisions")
def pages_revision_detail(page_id, revision_id):
    revision = get_revision(page_id, revision_id, current_actor())
    return jsonify(normalize_revision(revision, include_content=True))


@api_bp.route("/pages/<page_id>/restore/<revision_id>", methods=["POST"])
@jwt_required()
@permission_required("page", "restore")
def pages_restore(page_id, revision_id):
    page = restore_page(actor=current_actor(), page_id=page_id, revision_id=revision_id)
    return jsonify(normalize_page(page))
