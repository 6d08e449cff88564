from flask import Flask, send_from_directory

from .config import config_by_name
from .extensions import db, migrate, jwt
from .errors import register_error_handlers, register_jwt_handlers


def create_app(config_name: str = "development", overrides: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_handlers()

    from . import models  # noqa: F401

    # -------------------------------------------------
    # API Blueprint
    # -------------------------------------------------
    from .api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)

    # -------------------------------------------------
    # Stored uploads (public)
    # -------------------------------------------------
    from .utils.media import upload_root

    prefix = app.config.get("MEDIA_URL_PREFIX", "/uploads").rstrip("/")

    @app.route(f"{prefix}/<path:filename>", methods=["GET"], endpoint="uploaded_file")
    def uploaded_file(filename):
        return send_from_directory(upload_root(), filename)

    # -------------------------------------------------
    # CLI
    # -------------------------------------------------
    from .commands import create_admin

    app.cli.add_command(create_admin)

    return app
