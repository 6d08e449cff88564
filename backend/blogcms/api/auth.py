from flask import jsonify
from flask_jwt_extended import jwt_required

from blogcms.application.users.accounts import authenticate, get_user
from blogcms.normalizers.user import normalize_user
from blogcms.utils.decorators import current_actor
from .args import json_body
from . import api_bp


@api_bp.route("/auth/login", methods=["POST"])
def login():
    data = json_body()

    user, token = authenticate(data=data)

    return jsonify({
        "accessToken": token,
        "tokenType": "Bearer",
        "user": normalize_user(user, private=True),
    }), 200


@api_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    actor = current_actor()
    return jsonify(normalize_user(get_user(actor.id), private=True))
