from flask import jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.application.newsletter.subscriptions import list_subscribers, subscribe
from blogcms.normalizers import iso
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.decorators import current_actor, permission_required
from blogcms.utils.pagination import pagination_args
from .args import bool_arg, json_body
from . import api_bp


def normalize_subscriber(subscriber):
    return {
        "id": subscriber.id,
        "email": subscriber.email,
        "isActive": subscriber.is_active,
        "subscribedAt": iso(subscriber.created_at),
    }


@api_bp.route("/newsletter/subscribe", methods=["POST"])
def newsletter_subscribe():
    subscribe(json_body().get("email"))
    return jsonify({"message": "Subscribed successfully"}), 200


@api_bp.route("/admin/newsletter/subscribers", methods=["GET"])
@jwt_required()
@permission_required("newsletter", "manage")
def newsletter_subscribers():
    page, limit = pagination_args()
    result = list_subscribers(
        actor=current_actor(),
        search=request.args.get("search"),
        active=bool_arg("active"),
        page=page,
        limit=limit,
    )
    return jsonify(normalize_pagination(result, normalize_subscriber))
