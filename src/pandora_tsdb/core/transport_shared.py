"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

import json
import socket
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from ..config import TransportSettings, TsdbClientConfig
from ..operations.assembler import RequestBody, RequestDescriptor
from .errors import TsdbApiError, TsdbTransportError

REQUEST_ID_HEADER = "X-Reqid"


class HttpResponse(Protocol):
    status_code: int
    headers: Mapping[str, str]

    @property
    def content(self) -> bytes: ...


def build_default_headers(config: TsdbClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(settings: TransportSettings) -> httpx.Timeout:
    # Dial maps to connect and response-header wait maps to read; write/pool stay unbounded.
    # A zero timeout means no timeout.
    return httpx.Timeout(
        connect=settings.dial_timeout_seconds or None,
        read=settings.response_timeout_seconds or None,
        write=None,
        pool=None,
    )


def build_socket_options(settings: TransportSettings) -> list[tuple[int, int, int]]:
    """TCP keep-alive probes on every dialed connection."""

    interval = int(settings.keepalive_seconds)
    options = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
    # TCP_KEEPIDLE is Linux; macOS names the idle option TCP_KEEPALIVE.
    idle_option = getattr(socket, "TCP_KEEPIDLE", None) or getattr(socket, "TCP_KEEPALIVE", None)
    if idle_option is not None:
        options.append((socket.IPPROTO_TCP, idle_option, interval))
    if hasattr(socket, "TCP_KEEPINTVL"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval))
    return options


def build_request_headers(descriptor: RequestDescriptor) -> dict[str, str]:
    headers: dict[str, str] = {}
    if descriptor.token:
        headers["Authorization"] = descriptor.token
    content_type = _content_type(descriptor.body)
    if content_type is not None:
        headers["Content-Type"] = content_type
    return headers


def encode_body(body: RequestBody) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_response(descriptor: RequestDescriptor, response: HttpResponse) -> Any:
    """Raise the descriptor's structured error on non-2xx, else decode the JSON body."""

    status_code = response.status_code
    if not 200 <= status_code < 300:
        raise build_api_error(descriptor, response)

    content = response.content
    if not content or not content.strip():
        payload = None
    else:
        try:
            payload = json.loads(content)
        except ValueError as exc:
            raise TsdbTransportError(
                f"{descriptor.operation}: response body is not valid JSON"
            ) from exc

    if descriptor.response_target is None:
        return payload
    return descriptor.response_target(payload)


def build_api_error(descriptor: RequestDescriptor, response: HttpResponse) -> TsdbApiError:
    return descriptor.error_builder.build(
        response.status_code,
        response.content,
        request_id=response.headers.get(REQUEST_ID_HEADER),
    )


def _content_type(body: RequestBody) -> str | None:
    if body is None:
        return None
    if isinstance(body, (str, bytes)):
        return "text/plain"
    return "application/json"


__all__ = [
    "REQUEST_ID_HEADER",
    "build_default_headers",
    "build_default_timeout",
    "build_socket_options",
    "build_request_headers",
    "encode_body",
    "decode_response",
    "build_api_error",
]
