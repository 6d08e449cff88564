from flask import jsonify
from sqlalchemy import text

from blogcms.extensions import db
from blogcms.models.base import utcnow
from . import api_bp


@api_bp.route("/health", methods=["GET"])
def health_check():
    db.session.execute(text("SELECT 1"))
    return jsonify({
        "status": "ok",
        "service": "blogcms",
        "timestamp": utcnow().isoformat(),
    })
