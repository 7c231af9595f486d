"""
Uniform JSON response envelope.

Every body the API returns has the shape::

    {"code": 200, "message": "success", "data": {...}, "timestamp": "2024-01-01T08:00:00+08:00"}

``data`` is omitted when there is nothing to return.  The HTTP status is
derived from ``code`` through ``http_status_for``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config.settings import config
from utils.errors import AppError

_STATUS_BY_CODE = {
    200: 200,
    201: 201,
    400: 400,
    401: 401,
    403: 403,
    404: 404,
    422: 422,
    500: 500,
}


def http_status_for(code: int) -> int:
    """Map a business code to an HTTP status.

    NOTE: codes outside the table fall back to 200 OK even when they denote
    a failure; the envelope ``code`` still carries the real value.
    """
    return _STATUS_BY_CODE.get(code, 200)


def current_timestamp() -> str:
    offset = timezone(timedelta(hours=config.response_utc_offset_hours))
    return datetime.now(timezone.utc).astimezone(offset).isoformat()


class ApiResponse(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None
    timestamp: str = Field(default_factory=current_timestamp)

    @classmethod
    def success(cls, data: Any = None, message: str = "success") -> "ApiResponse":
        return cls(code=200, message=message, data=data)

    @classmethod
    def error(cls, code: int, message: str) -> "ApiResponse":
        return cls(code=code, message=message)

    @classmethod
    def from_result(cls, result: Any = None, exc: Optional[AppError] = None) -> "ApiResponse":
        """Fold an outcome into an envelope; any failure becomes code 500."""
        if exc is not None:
            return cls.error(500, exc.message)
        return cls.success(result)

    def body(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json")
        if payload.get("data") is None:
            payload.pop("data", None)
        return payload

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=http_status_for(self.code), content=self.body())
