"""
Client session and cancellation.

An ApiSession owns the base URL, the bearer token and one
httpx.AsyncClient. There is no module-level token: everything that talks
to the API takes a session explicitly.
"""

from typing import Any

import httpx

from app.client.errors import (
    NetworkError,
    OperationCancelled,
    PermissionDenied,
    RequestFailed,
    ServerError,
    SessionExpired,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


class CancelToken:
    """Abort signal shared between a caller and the operations it starts."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelled()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        detail = body.get("detail", body.get("message"))
        if isinstance(detail, list):
            # FastAPI request validation: [{"loc": [...], "msg": "..."}, ...]
            return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
        if detail is not None:
            return str(detail)
    return response.reason_phrase


class ApiSession:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.role: str | None = None
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiSession":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def request(
        self,
        method: str,
        path: str,
        cancel: CancelToken | None = None,
        **kwargs: Any,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises the client error taxonomy; a 401 also clears the token so the
        next authenticated call fails fast instead of replaying a dead one.
        """
        if cancel:
            cancel.raise_if_cancelled()

        try:
            response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TransportError as e:
            logger.warning("api_network_error", method=method, path=path, error=str(e))
            raise NetworkError(f"Could not reach the server: {e}") from e

        if cancel:
            cancel.raise_if_cancelled()

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.info("api_request_failed", method=method, path=path, status_code=response.status_code)
            if response.status_code == 401:
                self.token = None
                self.role = None
                raise SessionExpired(detail or "Session expired. Please log in again.", 401)
            if response.status_code == 403:
                raise PermissionDenied(detail, 403)
            if response.status_code >= 500:
                raise ServerError(detail, response.status_code)
            raise RequestFailed(detail, response.status_code)

        if not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str, cancel: CancelToken | None = None) -> str:
        data = await self.request("POST", "/api/auth/login", cancel, json={"email": email, "password": password})
        self.token = data["access_token"]
        self.role = data.get("role")
        return self.token

    def logout(self) -> None:
        self.token = None
        self.role = None
