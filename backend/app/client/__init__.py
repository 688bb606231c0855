from app.client.api import BookingApiClient, backoff_delay
from app.client.envelope import Envelope
from app.client.errors import (
    ApiError, NetworkError, SessionExpired, PermissionDenied, ServerError,
    RequestFailed, FormValidationError, OperationCancelled,
)
from app.client.notices import FormNoticeWatcher, InMemoryStatusStore, JsonFileStatusStore
from app.client.session import ApiSession, CancelToken
from app.client.validation import validate_booking_form

__all__ = [
    "BookingApiClient", "backoff_delay", "Envelope",
    "ApiError", "NetworkError", "SessionExpired", "PermissionDenied", "ServerError",
    "RequestFailed", "FormValidationError", "OperationCancelled",
    "FormNoticeWatcher", "InMemoryStatusStore", "JsonFileStatusStore",
    "ApiSession", "CancelToken", "validate_booking_form",
]
