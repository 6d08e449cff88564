from flask import jsonify
from flask_jwt_extended import jwt_required

from blogcms.application.blog.categories import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)
from blogcms.normalizers.category import normalize_category
from blogcms.utils.decorators import current_actor, permission_required
from .args import json_body
from . import api_bp


@api_bp.route("/categories", methods=["GET"])
def categories_list():
    return jsonify([normalize_category(c) for c in list_categories()])


@api_bp.route("/categories/<category_id>", methods=["GET"])
def categories_get(category_id):
    return jsonify(normalize_category(get_category(category_id)))


@api_bp.route("/categories", methods=["POST"])
@jwt_required()
@permission_required("category", "manage")
def categories_create():
    category = create_category(actor=current_actor(), data=json_body())
    return jsonify(normalize_category(category)), 201


@api_bp.route("/categories/<category_id>", methods=["PUT"])
@jwt_required()
@permission_required("category", "manage")
def categories_update(category_id):
    category = update_category(actor=current_actor(), category_id=category_id, data=json_body())
    return jsonify(normalize_category(category))


@api_bp.route("/categories/<category_id>", methods=["DELETE"])
@jwt_required()
@permission_required("category", "manage")
def categories_delete(category_id):
    delete_category(actor=current_actor(), category_id=category_id)
    return jsonify({"message": "Category deleted successfully"}), 200
