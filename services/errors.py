"""Error kinds raised by the result services.

Every error carries a user-facing ``message`` and the HTTP ``status_code`` the
API surfaces it with. They are raised before any write, so a failed operation
never leaves a partially updated collection behind.
"""


class ResultServiceError(Exception):
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ResultServiceError):
    """Missing field, marks out of range, non-numeric marks or bad format."""

    status_code = 422


class NotFoundError(ResultServiceError):
    status_code = 404


class ConflictError(ResultServiceError):
    """Duplicate email or roll number at registration."""

    status_code = 409


class AuthenticationError(ResultServiceError):
    status_code = 401


class PermissionDeniedError(ResultServiceError):
    status_code = 403
