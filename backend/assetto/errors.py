"""Service-level errors and the HTTP status each one maps to.

Services raise these instead of HTTPException; ``main`` installs a single
handler that renders them as ``{"message": ...}``.
"""


class AppError(ValueError):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is missing or a value is not allowed."""

    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """A uniqueness constraint would be violated (e.g. duplicate username)."""

    status_code = 400


class AuthError(AppError):
    status_code = 400


class InvalidEntityTypeError(AppError):
    """A recycle bin entry names an entity kind that is not registered."""

    status_code = 400


class InternalError(AppError):
    status_code = 500
