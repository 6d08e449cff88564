class CMSError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    error = "InternalError"

    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(CMSError):
    status_code = 400
    error = "ValidationError"


class AuthenticationError(CMSError):
    status_code = 401
    error = "AuthenticationError"


class AuthorizationError(CMSError):
    status_code = 403
    error = "AuthorizationError"


ForbiddenError = AuthorizationError


class NotFoundError(CMSError):
    status_code = 404
    error = "NotFoundError"


class ConflictError(CMSError):
    status_code = 409
    error = "ConflictError"


class ConcurrentWriteError(ConflictError):
    """A unique constraint rejected the write; the unit of work may be retried."""


class UnsupportedMediaTypeError(CMSError):
    status_code = 400
    error = "UnsupportedMediaTypeError"


class InternalError(CMSError):
    pass
