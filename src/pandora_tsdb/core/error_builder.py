"""Build structured errors from failed HTTP responses."""

from __future__ import annotations

import json
from typing import Protocol

from .errors import (
    TsdbApiError,
    TsdbBadRequestError,
    TsdbConflictError,
    TsdbNotFoundError,
    TsdbServerError,
    TsdbUnauthorizedError,
)

_STATUS_ERRORS: dict[int, type[TsdbApiError]] = {
    400: TsdbBadRequestError,
    401: TsdbUnauthorizedError,
    403: TsdbUnauthorizedError,
    404: TsdbNotFoundError,
    409: TsdbConflictError,
}


class ErrorBuilder(Protocol):
    def build(
        self,
        status_code: int,
        content: bytes,
        *,
        request_id: str | None = None,
    ) -> TsdbApiError: ...


class TsdbErrorBuilder:
    """Default strategy: reads ``{"error": "..."}`` bodies and maps status codes."""

    def build(
        self,
        status_code: int,
        content: bytes,
        *,
        request_id: str | None = None,
    ) -> TsdbApiError:
        message = extract_error_message(content) or f"TSDB request failed with HTTP {status_code}"
        return error_class_for_status(status_code)(
            message,
            status_code=status_code,
            request_id=request_id,
        )


def error_class_for_status(status_code: int) -> type[TsdbApiError]:
    if status_code >= 500:
        return TsdbServerError
    return _STATUS_ERRORS.get(status_code, TsdbApiError)


def extract_error_message(content: bytes) -> str | None:
    if not content:
        return None
    text = content.decode("utf-8", errors="replace").strip()
    if text == "":
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict):
        value = payload.get("error")
        if value is not None:
            return str(value)
    return text


__all__ = [
    "ErrorBuilder",
    "TsdbErrorBuilder",
    "error_class_for_status",
    "extract_error_message",
]
