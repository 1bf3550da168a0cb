"""
Application exceptions.

Services raise these; the handlers registered in ``app.main`` translate each
one to a single HTTP status. Request validation failures are not defined
here; they come from FastAPI/pydantic and are rendered as field errors.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class AlreadyExistsError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class PermissionDeniedError(AppError):
    status_code = 403


class MissingParameterError(AppError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UpstreamError(AppError):
    """The geocoding provider failed (transport, status or payload)."""

    status_code = 500
