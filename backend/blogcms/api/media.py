import os

from flask import Response, current_app, jsonify, request, send_file
from flask_jwt_extended import jwt_required

from blogcms.application.media import (
    get_media,
    list_media,
    purge_media,
    trash_media,
    update_media,
    upload_media,
)
from blogcms.normalizers.media import normalize_media
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.decorators import current_actor, permission_required
from blogcms.utils.media import PLACEHOLDER_SVG, render_thumbnail
from blogcms.utils.pagination import pagination_args
from .args import json_body, sort_args
from . import api_bp


@api_bp.route("/media/upload", methods=["POST"])
@jwt_required()
@permission_required("media", "upload")
def media_upload():
    media = upload_media(
        actor=current_actor(),
        file=request.files.get("file"),
        data=request.form.to_dict(),
    )
    return jsonify(normalize_media(media)), 201


@api_bp.route("/media", methods=["GET"])
@jwt_required()
@permission_required("media", "list")
def media_list():
    page, limit = pagination_args()
    sort_by, sort_order = sort_args()

    result = list_media(
        search=request.args.get("search"),
        mime_type=request.args.get("mimeType"),
        uploaded_by=request.args.get("uploadedBy"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_media))


@api_bp.route("/media/<media_id>", methods=["GET"])
def media_get(media_id):
    return jsonify(normalize_media(get_media(media_id)))


@api_bp.route("/media/<media_id>", methods=["PUT"])
@jwt_required()
@permission_required("media", "edit")
def media_update(media_id):
    media = update_media(actor=current_actor(), media_id=media_id, data=json_body())
    return jsonify(normalize_media(media))


@api_bp.route("/media/<media_id>", methods=["DELETE"])
@jwt_required()
@permission_required("media", "trash")
def media_trash(media_id):
    trash_media(actor=current_actor(), media_id=media_id)
    return jsonify({"message": "Media deleted successfully"}), 200


@api_bp.route("/media/<media_id>/hard", methods=["DELETE"])
@jwt_required()
@permission_required("media", "purge")
def media_purge(media_id):
    purge_media(actor=current_actor(), media_id=media_id)
    return jsonify({"message": "Media permanently deleted"}), 200


@api_bp.route("/media/<media_id>/file", methods=["GET"])
def media_file(media_id):
    media = get_media(media_id)
    if not os.path.exists(media.storage_path):
        return jsonify({"message": "File not found", "error": "NotFoundError"}), 404

    return send_file(
        media.storage_path,
        mimetype=media.mime_type,
        as_attachment=False,
        download_name=media.original_filename,
    )


@api_bp.route("/media/<media_id>/thumbnail", methods=["GET"])
def media_thumbnail(media_id):
    media = get_media(media_id)

    if media.thumbnail_path and os.path.exists(media.thumbnail_path):
        return send_file(media.thumbnail_path, mimetype="image/jpeg")

    if media.is_raster_image and os.path.exists(media.storage_path):
        try:
            return Response(render_thumbnail(media.storage_path), mimetype="image/jpeg")
        except Exception as e:
            current_app.logger.warning(f"Thumbnail rendering failed for media {media.id}: {e}")

    return Response(PLACEHOLDER_SVG, mimetype="image/svg+xml")
