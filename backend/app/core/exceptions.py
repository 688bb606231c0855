"""
Application exceptions.

All of them are HTTPExceptions so FastAPI renders them as
`{"detail": ...}` without extra handlers. Services raise, routes don't catch.
"""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(AppException):
    def __init__(self, resource: str = "Resource", identifier: int | str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier is not None:
            detail = f"{resource} {identifier} not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(AppException):
    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class InvalidTransition(AppException):
    """Requested status change is not allowed from the booking's current status."""

    def __init__(self, kind: str, current: str, action: str) -> None:
        self.kind = kind
        self.current = current
        self.action = action
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action.replace('_', ' ')} a {kind} booking in status {current}",
        )


class BookingConflict(AppException):
    def __init__(self, detail: str = "The selected date is already booked") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DeleteNotAllowed(AppException):
    def __init__(self, detail: str = "Only rejected registrations can be deleted") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class FormClosed(AppException):
    def __init__(self, form_type: str) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"The {form_type} form is not currently accepting submissions",
        )


class UploadRejected(AppException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(AppException):
    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(AppException):
    def __init__(self, detail: str = "You don't have permission to access this resource") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class BadRequestError(AppException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
