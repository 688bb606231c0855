"""
Error taxonomy for the API client.

Every failure a caller can see is one of these; httpx exceptions never
leak out of ApiSession.
"""


class ApiError(Exception):
    """Base class. `status_code` is None when no response was received."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """No response: connection refused, DNS failure, timeout."""


class SessionExpired(ApiError):
    """401. The session's token has been dropped; the user must log in again."""


class PermissionDenied(ApiError):
    """403."""


class ServerError(ApiError):
    """5xx."""


class RequestFailed(ApiError):
    """Any other 4xx: validation errors, conflicts, not found."""


class FormValidationError(ApiError):
    """Raised before any request is made when a form fails local validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Please correct the highlighted fields")
        self.errors = errors


class OperationCancelled(Exception):
    """The CancelToken passed into an operation was cancelled."""
