"""Error types."""

from __future__ import annotations


class TsdbError(Exception):
    """Base exception for this package."""


class TsdbConfigError(TsdbError, ValueError):
    """Invalid client configuration."""


class InvalidEndpointSchemeError(TsdbConfigError):
    """Endpoint does not start with http:// or https://."""


class InvalidEndpointTrailingSlashError(TsdbConfigError):
    """Endpoint ends with '/'."""


class TsdbBuildError(TsdbError):
    """Request descriptor could not be assembled."""


class UnknownOperationError(TsdbBuildError):
    """Operation name is not in the registry."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"unmatched operation name: {operation}")
        self.operation = operation


class PathArgumentError(TsdbBuildError, ValueError):
    """Path arguments do not fit the operation path template."""


class TsdbClientClosedError(TsdbError):
    """Raised when client is used after close."""


class TsdbTransportError(TsdbError):
    """Network/transport-level failure."""


class TsdbApiError(TsdbError):
    """Non-2xx response from the TSDB service."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.request_id = request_id


class TsdbBadRequestError(TsdbApiError):
    """Request rejected as invalid (400)."""


class TsdbUnauthorizedError(TsdbApiError):
    """Token missing, expired or not allowed (401/403)."""


class TsdbNotFoundError(TsdbApiError):
    """Repo, series or view does not exist (404)."""


class TsdbConflictError(TsdbApiError):
    """Resource already exists (409)."""


class TsdbServerError(TsdbApiError):
    """Server-side failure (5xx)."""


__all__ = [
    "TsdbError",
    "TsdbConfigError",
    "InvalidEndpointSchemeError",
    "InvalidEndpointTrailingSlashError",
    "TsdbBuildError",
    "UnknownOperationError",
    "PathArgumentError",
    "TsdbClientClosedError",
    "TsdbTransportError",
    "TsdbApiError",
    "TsdbBadRequestError",
    "TsdbUnauthorizedError",
    "TsdbNotFoundError",
    "TsdbConflictError",
    "TsdbServerError",
]
