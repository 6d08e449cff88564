from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.admin.activity import list_activity
from blogcms.application.admin.dashboard import dashboard_stats
from blogcms.normalizers.activity import normalize_activity
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.decorators import current_actor, permission_required
from blogcms.utils.pagination import pagination_args
from . import api_bp


@api_bp.route("/admin/dashboard/stats", methods=["GET"])
@jwt_required()
@permission_required("dashboard", "view")
def admin_dashboard_stats():
    return jsonify(dashboard_stats(actor=current_actor()))


@api_bp.route("/admin/activity", methods=["GET"])
@jwt_required()
@permission_required("activity", "view")
def admin_activity():
    page, limit = pagination_args()
    result = list_activity(
        actor=current_actor(),
        action=request.args.get("action"),
        entity_type=request.args.get("entityType"),
        entity_id=request.args.get("entityId"),
        actor_id=request.args.get("actorId"),
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_activity))
