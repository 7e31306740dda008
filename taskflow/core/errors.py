"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to; the handlers registered in
``taskflow.main`` render them as ``{"success": false, "message": ...}``.
"""


class ApiError(Exception):
    """Base class for errors that are reported to the client as-is."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ApiError):
    """Payload or query failed a shape/format rule."""

    status_code = 400


class ConflictError(ApiError):
    """Write would violate a uniqueness rule (e.g. duplicate email)."""

    status_code = 400


class AuthenticationError(ApiError):
    """Token missing, invalid, or expired."""

    status_code = 401


class AuthorizationError(ApiError):
    """Caller's role or ownership does not permit the action."""

    status_code = 403


class NotFoundError(ApiError):
    status_code = 404
