"""Application error taxonomy.

Every error raised on purpose by the API derives from ``AppError`` and carries the
HTTP status it maps to. The exception handlers in ``wedding_api.main`` turn them
into ``{"error": message}`` responses.
"""


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    # Duplicate values are reported as bad requests rather than 409
    status_code = 400
    default_message = "Resource already exists"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
