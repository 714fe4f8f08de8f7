from __future__ import annotations

from dataclasses import FrozenInstanceError

import socket

import pytest

from pandora_tsdb.config import KEEPALIVE_SECONDS, TsdbClientConfig
from pandora_tsdb.core.errors import (
    InvalidEndpointSchemeError,
    InvalidEndpointTrailingSlashError,
    TsdbConfigError,
)
from pandora_tsdb.core.transport import build_http_client
from pandora_tsdb.core.transport_shared import build_default_timeout, build_socket_options


@pytest.mark.parametrize(
    "endpoint",
    [
        "https://tsdb.example.com",
        "http://localhost:9999",
        "http://10.0.0.1",
        "https://tsdb.example.com/api",
    ],
)
def test_config_validate_accepts_valid_endpoints(endpoint: str):
    TsdbClientConfig(endpoint=endpoint).validate()


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        ("tsdb.example.com", InvalidEndpointSchemeError),
        ("ftp://tsdb.example.com", InvalidEndpointSchemeError),
        ("HTTPS://tsdb.example.com", InvalidEndpointSchemeError),
        ("https://tsdb.example.com/", InvalidEndpointTrailingSlashError),
        ("http://tsdb.example.com/api/", InvalidEndpointTrailingSlashError),
        # scheme is checked first
        ("tsdb.example.com/", InvalidEndpointSchemeError),
    ],
)
def test_config_validate_rejects_invalid_endpoints(endpoint: str, expected: type[Exception]):
    with pytest.raises(expected):
        TsdbClientConfig(endpoint=endpoint).validate()


def test_config_validate_rejects_empty_endpoint():
    with pytest.raises(TsdbConfigError, match="endpoint must not be empty"):
        TsdbClientConfig(endpoint="").validate()


def test_config_errors_are_value_errors():
    with pytest.raises(ValueError):
        TsdbClientConfig(endpoint="tsdb.example.com").validate()


@pytest.mark.parametrize("field", ["dial_timeout_seconds", "response_timeout_seconds"])
@pytest.mark.parametrize("value", [-1.0, -0.5])
def test_config_validate_rejects_negative_timeouts(field: str, value: float):
    with pytest.raises(TsdbConfigError, match=field):
        TsdbClientConfig(**{field: value}).validate()


def test_zero_timeouts_are_accepted_and_mean_no_timeout():
    cfg = TsdbClientConfig(
        endpoint="https://tsdb.example.com",
        dial_timeout_seconds=0,
        response_timeout_seconds=0,
    )
    cfg.validate()
    timeout = build_default_timeout(cfg.transport_settings())
    assert timeout.connect is None
    assert timeout.read is None


def test_config_is_immutable():
    cfg = TsdbClientConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.endpoint = "https://other.example.com"  # type: ignore[misc]


def test_transport_settings_carry_timeouts_and_fixed_keepalive(config: TsdbClientConfig):
    settings = config.transport_settings()
    assert settings.dial_timeout_seconds == 5.0
    assert settings.response_timeout_seconds == 10.0
    assert settings.keepalive_seconds == KEEPALIVE_SECONDS == 30.0


def test_default_timeout_maps_dial_and_response_timeouts(config: TsdbClientConfig):
    timeout = build_default_timeout(config.transport_settings())
    assert timeout.connect == 5.0
    assert timeout.read == 10.0
    assert timeout.write is None
    assert timeout.pool is None


def test_socket_options_enable_tcp_keepalive(config: TsdbClientConfig):
    options = build_socket_options(config.transport_settings())
    assert options[0] == (socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
    if hasattr(socket, "TCP_KEEPIDLE"):
        assert (socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, 30) in options
    if hasattr(socket, "TCP_KEEPINTVL"):
        assert (socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, 30) in options


def test_http_client_is_built_with_config(config: TsdbClientConfig):
    client = build_http_client(config)
    try:
        assert str(client.base_url).rstrip("/") == "https://tsdb.example.com"
        assert client.timeout.connect == 5.0
        assert client.timeout.read == 10.0
        assert client.headers["User-Agent"] == config.user_agent
    finally:
        client.close()


def test_from_env_reads_values():
    cfg = TsdbClientConfig.from_env(
        {
            "PANDORA_TSDB_ENDPOINT": "http://localhost:9999",
            "PANDORA_TSDB_DIAL_TIMEOUT": "2.5",
            "PANDORA_TSDB_RESPONSE_TIMEOUT": "7",
        }
    )
    assert cfg.endpoint == "http://localhost:9999"
    assert cfg.dial_timeout_seconds == 2.5
    assert cfg.response_timeout_seconds == 7.0


def test_from_env_keeps_defaults_for_missing_values():
    assert TsdbClientConfig.from_env({}) == TsdbClientConfig()


def test_from_env_rejects_non_numeric_timeout():
    with pytest.raises(TsdbConfigError, match="PANDORA_TSDB_DIAL_TIMEOUT"):
        TsdbClientConfig.from_env({"PANDORA_TSDB_DIAL_TIMEOUT": "soon"})
