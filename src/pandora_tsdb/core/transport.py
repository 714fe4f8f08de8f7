"""Sync HTTP transport executing request descriptors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from ..config import TsdbClientConfig
from ..operations.assembler import RequestDescriptor
from .errors import TsdbError, TsdbTransportError
from .transport_shared import (
    HttpResponse,
    build_default_headers,
    build_default_timeout,
    build_request_headers,
    build_socket_options,
    decode_response,
    encode_body,
)

logger = logging.getLogger("pandora_tsdb")


class SyncTransportClient(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: bytes | None,
    ) -> HttpResponse: ...

    def close(self) -> None: ...


def build_http_client(config: TsdbClientConfig) -> httpx.Client:
    settings = config.transport_settings()
    return httpx.Client(
        base_url=config.endpoint,
        headers=build_default_headers(config),
        timeout=build_default_timeout(settings),
        transport=httpx.HTTPTransport(socket_options=build_socket_options(settings)),
    )


class SyncTransport:
    """Synchronous transport for the TSDB API. No retries."""

    def __init__(
        self,
        config: TsdbClientConfig,
        *,
        client: SyncTransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or build_http_client(config)

    @property
    def client(self) -> SyncTransportClient:
        return self._client

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def execute(self, descriptor: RequestDescriptor) -> Any:
        if self._closed:
            raise TsdbTransportError("transport is already closed")

        logger.debug(
            "request start operation=%s method=%s path=%s",
            descriptor.operation,
            descriptor.method.value,
            descriptor.path,
        )
        headers = build_request_headers(descriptor)
        content = encode_body(descriptor.body)
        try:
            response = self._client.request(
                descriptor.method.value,
                descriptor.path,
                headers=headers,
                content=content,
            )
        except Exception as exc:
            logger.error(
                "request network error operation=%s path=%s error=%s",
                descriptor.operation,
                descriptor.path,
                exc.__class__.__name__,
            )
            raise TsdbTransportError(f"{descriptor.operation}: network/transport error") from exc

        logger.debug(
            "response received operation=%s http_status=%s",
            descriptor.operation,
            response.status_code,
        )
        try:
            result = decode_response(descriptor, response)
        except TsdbError:
            logger.error(
                "request failed operation=%s path=%s http_status=%s",
                descriptor.operation,
                descriptor.path,
                response.status_code,
            )
            raise
        logger.info("request success operation=%s path=%s", descriptor.operation, descriptor.path)
        return result


__all__ = [
    "SyncTransport",
    "build_http_client",
]
