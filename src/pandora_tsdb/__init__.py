"""Public package exports for Pandora TSDB client."""

from .async_client import AsyncTsdbClient
from .client import TsdbClient
from .config import TsdbClientConfig
from .core.errors import (
    InvalidEndpointSchemeError,
    InvalidEndpointTrailingSlashError,
    PathArgumentError,
    TsdbApiError,
    TsdbConfigError,
    TsdbError,
    UnknownOperationError,
)
from .operations.registry import Operation

__all__ = [
    "TsdbClient",
    "AsyncTsdbClient",
    "TsdbClientConfig",
    "Operation",
    "TsdbError",
    "TsdbConfigError",
    "InvalidEndpointSchemeError",
    "InvalidEndpointTrailingSlashError",
    "UnknownOperationError",
    "PathArgumentError",
    "TsdbApiError",
]
