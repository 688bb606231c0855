"""
Response envelope.

List endpoints have answered with a bare list, `{"bookings": [...]}` and
`{"data": [...]}` over time. Everything is normalised here, once, so the
rest of the client reads `envelope.bookings` and nothing else.
"""

from typing import Any, Optional

from pydantic import BaseModel, model_validator


class Envelope(BaseModel):
    message: Optional[str] = None
    booking: Optional[dict[str, Any]] = None
    bookings: list[dict[str, Any]] = []
    total: int = 0

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, payload: Any) -> Any:
        if payload is None:
            return {}
        if isinstance(payload, list):
            return {"bookings": payload, "total": len(payload)}
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected response payload: {type(payload).__name__}")

        payload = dict(payload)
        data = payload.pop("data", None)
        if isinstance(data, list) and "bookings" not in payload:
            payload["bookings"] = data
        elif isinstance(data, dict) and "booking" not in payload:
            payload["booking"] = data

        if payload.get("total") is None:
            payload["total"] = len(payload.get("bookings") or [])
        return payload

    @classmethod
    def parse(cls, payload: Any) -> "Envelope":
        return cls.model_validate(payload)
