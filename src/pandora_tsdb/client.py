"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import Any

from .client_shared import build_assembler, validate_client_config
from .config import TsdbClientConfig
from .core.error_builder import ErrorBuilder
from .core.errors import TsdbClientClosedError
from .core.transport import SyncTransport
from .operations.assembler import RequestBody, RequestDescriptor, ResponseTarget
from .operations.bodies import (
    build_create_repo_body,
    build_create_series_body,
    build_create_view_body,
    build_metadata_body,
    build_query_body,
)
from .operations.registry import Operation


class TsdbClient:
    """Public TSDB API client.

    Construction validates the config and sets up the HTTP transport without
    connecting. The client is safe to share between threads; requests are
    built independently and the config is never mutated.
    """

    def __init__(
        self,
        config: TsdbClientConfig | None = None,
        *,
        transport: SyncTransport | None = None,
        error_builder: ErrorBuilder | None = None,
    ) -> None:
        self._config = config or TsdbClientConfig()
        validate_client_config(self._config)

        self._assembler = build_assembler(error_builder)
        self._transport = transport or SyncTransport(self._config)
        self._closed = False

    @property
    def config(self) -> TsdbClientConfig:
        return self._config

    @property
    def transport(self) -> SyncTransport:
        return self._transport

    @property
    def error_builder(self) -> ErrorBuilder:
        return self._assembler.error_builder

    def _ensure_open(self) -> None:
        if self._closed:
            raise TsdbClientClosedError("TsdbClient is already closed")

    def build_request(
        self,
        operation: str,
        *path_args: str,
        token: str,
        body: RequestBody = None,
        response_target: ResponseTarget | None = None,
    ) -> RequestDescriptor:
        return self._assembler.build(
            operation,
            *path_args,
            token=token,
            body=body,
            response_target=response_target,
        )

    def execute(self, descriptor: RequestDescriptor) -> Any:
        self._ensure_open()
        return self._transport.execute(descriptor)

    def _call(
        self,
        operation: Operation,
        *path_args: str,
        token: str,
        body: RequestBody = None,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        self._ensure_open()
        descriptor = self.build_request(
            operation,
            *path_args,
            token=token,
            body=body,
            response_target=response_target,
        )
        return self._transport.execute(descriptor)

    def create_repo(
        self,
        repo: str,
        *,
        token: str,
        region: str,
        metadata: Mapping[str, str] | None = None,
    ) -> Any:
        body = build_create_repo_body(region, metadata)
        return self._call(Operation.CREATE_REPO, repo, token=token, body=body)

    def list_repos(self, *, token: str, response_target: ResponseTarget | None = None) -> Any:
        return self._call(Operation.LIST_REPOS, token=token, response_target=response_target)

    def get_repo(
        self,
        repo: str,
        *,
        token: str,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        return self._call(Operation.GET_REPO, repo, token=token, response_target=response_target)

    def delete_repo(self, repo: str, *, token: str) -> Any:
        return self._call(Operation.DELETE_REPO, repo, token=token)

    def update_repo_metadata(
        self,
        repo: str,
        *,
        token: str,
        metadata: Mapping[str, str],
    ) -> Any:
        body = build_metadata_body(metadata)
        return self._call(Operation.UPDATE_REPO_METADATA, repo, token=token, body=body)

    def delete_repo_metadata(self, repo: str, *, token: str) -> Any:
        return self._call(Operation.DELETE_REPO_METADATA, repo, token=token)

    def create_series(
        self,
        repo: str,
        series: str,
        *,
        token: str,
        retention: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> Any:
        body = build_create_series_body(retention, metadata)
        return self._call(Operation.CREATE_SERIES, repo, series, token=token, body=body)

    def update_series_metadata(
        self,
        repo: str,
        series: str,
        *,
        token: str,
        metadata: Mapping[str, str],
    ) -> Any:
        body = build_metadata_body(metadata)
        return self._call(Operation.UPDATE_SERIES_METADATA, repo, series, token=token, body=body)

    def delete_series_metadata(self, repo: str, series: str, *, token: str) -> Any:
        return self._call(Operation.DELETE_SERIES_METADATA, repo, series, token=token)

    def list_series(
        self,
        repo: str,
        *,
        token: str,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        return self._call(Operation.LIST_SERIES, repo, token=token, response_target=response_target)

    def delete_series(self, repo: str, series: str, *, token: str) -> Any:
        return self._call(Operation.DELETE_SERIES, repo, series, token=token)

    def create_view(
        self,
        repo: str,
        view: str,
        *,
        token: str,
        sql: str,
        retention: str | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> Any:
        body = build_create_view_body(sql, retention, metadata)
        return self._call(Operation.CREATE_VIEW, repo, view, token=token, body=body)

    def list_views(
        self,
        repo: str,
        *,
        token: str,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        return self._call(Operation.LIST_VIEW, repo, token=token, response_target=response_target)

    def delete_view(self, repo: str, view: str, *, token: str) -> Any:
        return self._call(Operation.DELETE_VIEW, repo, view, token=token)

    def get_view(
        self,
        repo: str,
        view: str,
        *,
        token: str,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        return self._call(
            Operation.GET_VIEW,
            repo,
            view,
            token=token,
            response_target=response_target,
        )

    def query_points(
        self,
        repo: str,
        *,
        token: str,
        sql: str,
        response_target: ResponseTarget | None = None,
    ) -> Any:
        return self._call(
            Operation.QUERY_POINTS,
            repo,
            token=token,
            body=build_query_body(sql),
            response_target=response_target,
        )

    def write_points(self, repo: str, *, token: str, data: str | bytes) -> Any:
        """Write points already serialized in the service's text format."""

        if not isinstance(data, (str, bytes)):
            raise TypeError("data must be str | bytes")
        return self._call(Operation.WRITE_POINTS, repo, token=token, body=data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._transport.close()

    def __enter__(self) -> "TsdbClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "TsdbClient",
]
