from flask import current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from blogcms.domain.exceptions import CMSError
from blogcms.extensions import jwt


def error_response(status_code: int, message: str, error: str | None = None, errors=None):
    body = {"message": message}
    if error:
        body["error"] = error
    if errors:
        body["errors"] = errors
    return jsonify(body), status_code


def request_context() -> dict:
    return {
        "path": request.path,
        "method": request.method,
        "actor_id": g.get("actor_id"),
        "ip": request.remote_addr,
        "user_agent": request.headers.get("User-Agent"),
    }


def register_error_handlers(app):
    @app.errorhandler(CMSError)
    def handle_cms_error(error: CMSError):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s %s", error.error, error.message, request_context())
            return error_response(500, "An unexpected error occurred", "InternalError")
        return error_response(error.status_code, error.message, error.error, error.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.code or 500, error.description or error.name, error.name)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        # Never leak internals to the caller
        current_app.logger.exception("Unhandled exception %s", request_context())
        return error_response(500, "An unexpected error occurred", "InternalError")


def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response(401, "Authentication required", "AuthenticationError")

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response(401, "Invalid token", "AuthenticationError")

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response(401, "Token has expired", "AuthenticationError")
