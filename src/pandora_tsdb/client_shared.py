"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import TsdbClientConfig
from .core.error_builder import ErrorBuilder, TsdbErrorBuilder
from .core.errors import TsdbConfigError
from .operations.assembler import RequestAssembler


def validate_client_config(config: TsdbClientConfig) -> None:
    if not isinstance(config, TsdbClientConfig):
        raise TsdbConfigError("config must be TsdbClientConfig")
    config.validate()


def build_assembler(error_builder: ErrorBuilder | None) -> RequestAssembler:
    return RequestAssembler(error_builder or TsdbErrorBuilder())


__all__ = [
    "validate_client_config",
    "build_assembler",
]
