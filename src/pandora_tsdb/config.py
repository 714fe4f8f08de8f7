"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .core.errors import (
    InvalidEndpointSchemeError,
    InvalidEndpointTrailingSlashError,
    TsdbConfigError,
)

DEFAULT_ENDPOINT = "https://tsdb.qiniu.com"
KEEPALIVE_SECONDS = 30.0

ENV_ENDPOINT = "PANDORA_TSDB_ENDPOINT"
ENV_DIAL_TIMEOUT = "PANDORA_TSDB_DIAL_TIMEOUT"
ENV_RESPONSE_TIMEOUT = "PANDORA_TSDB_RESPONSE_TIMEOUT"


@dataclass(slots=True, frozen=True)
class TransportSettings:
    """Connection settings handed to the HTTP transport."""

    dial_timeout_seconds: float
    response_timeout_seconds: float
    keepalive_seconds: float = KEEPALIVE_SECONDS


@dataclass(slots=True, frozen=True)
class TsdbClientConfig:
    """Runtime configuration for TSDB client."""

    endpoint: str = DEFAULT_ENDPOINT
    dial_timeout_seconds: float = 30.0
    response_timeout_seconds: float = 30.0
    user_agent: str = "pandora-tsdb/0.1.0"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TsdbClientConfig":
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if env.get(ENV_ENDPOINT):
            kwargs["endpoint"] = env[ENV_ENDPOINT]
        for env_name, field_name in (
            (ENV_DIAL_TIMEOUT, "dial_timeout_seconds"),
            (ENV_RESPONSE_TIMEOUT, "response_timeout_seconds"),
        ):
            raw = env.get(env_name)
            if not raw:
                continue
            try:
                kwargs[field_name] = float(raw)
            except ValueError as exc:
                raise TsdbConfigError(f"{env_name} must be a number, got {raw!r}") from exc
        return cls(**kwargs)  # type: ignore[arg-type]

    def transport_settings(self) -> TransportSettings:
        return TransportSettings(
            dial_timeout_seconds=self.dial_timeout_seconds,
            response_timeout_seconds=self.response_timeout_seconds,
        )

    def validate(self) -> None:
        if not self.endpoint:
            raise TsdbConfigError("endpoint must not be empty")
        if not self.endpoint.startswith(("http://", "https://")):
            raise InvalidEndpointSchemeError("endpoint should start with 'http://' or 'https://'")
        if self.endpoint.endswith("/"):
            raise InvalidEndpointTrailingSlashError("endpoint should not end with '/'")
        for field_name in ("dial_timeout_seconds", "response_timeout_seconds"):
            # 0 disables the timeout
            if getattr(self, field_name) < 0:
                raise TsdbConfigError(f"{field_name} must be >= 0")


__all__ = [
    "DEFAULT_ENDPOINT",
    "KEEPALIVE_SECONDS",
    "TransportSettings",
    "TsdbClientConfig",
]
