"""Operation registry: operation name -> HTTP method and path."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .paths import PathTemplate


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


class Operation(str, Enum):
    """Supported TSDB REST operations."""

    CREATE_REPO = "CreateRepo"
    LIST_REPOS = "ListRepos"
    GET_REPO = "GetRepo"
    DELETE_REPO = "DeleteRepo"
    UPDATE_REPO_METADATA = "UpdateRepoMetadata"
    DELETE_REPO_METADATA = "DeleteRepoMetadata"
    CREATE_SERIES = "CreateSeries"
    UPDATE_SERIES_METADATA = "UpdateSeriesMetadata"
    DELETE_SERIES_METADATA = "DeleteSeriesMetadata"
    LIST_SERIES = "ListSeries"
    DELETE_SERIES = "DeleteSeries"
    CREATE_VIEW = "CreateView"
    LIST_VIEW = "ListView"
    DELETE_VIEW = "DeleteView"
    GET_VIEW = "GetView"
    QUERY_POINTS = "QueryPoints"
    WRITE_POINTS = "WritePoints"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class OperationSpec:
    name: str
    method: HttpMethod
    path: PathTemplate

    @property
    def template(self) -> str:
        return self.path.printf_template


def _spec(operation: Operation, method: HttpMethod, path: str) -> tuple[str, OperationSpec]:
    return operation.value, OperationSpec(operation.value, method, PathTemplate.parse(path))


_REPO = "/v4/repos/{repo}"
_SERIES = _REPO + "/series/{series}"
_VIEW = _REPO + "/views/{view}"

OPERATIONS: Mapping[str, OperationSpec] = MappingProxyType(
    dict(
        [
            _spec(Operation.CREATE_REPO, HttpMethod.POST, _REPO),
            _spec(Operation.LIST_REPOS, HttpMethod.GET, "/v4/repos"),
            _spec(Operation.GET_REPO, HttpMethod.GET, _REPO),
            _spec(Operation.DELETE_REPO, HttpMethod.DELETE, _REPO),
            _spec(Operation.UPDATE_REPO_METADATA, HttpMethod.POST, _REPO + "/meta"),
            _spec(Operation.DELETE_REPO_METADATA, HttpMethod.DELETE, _REPO + "/meta"),
            _spec(Operation.CREATE_SERIES, HttpMethod.POST, _SERIES),
            _spec(Operation.UPDATE_SERIES_METADATA, HttpMethod.POST, _SERIES + "/meta"),
            _spec(Operation.DELETE_SERIES_METADATA, HttpMethod.DELETE, _SERIES + "/meta"),
            _spec(Operation.LIST_SERIES, HttpMethod.GET, _REPO + "/series"),
            _spec(Operation.DELETE_SERIES, HttpMethod.DELETE, _SERIES),
            _spec(Operation.CREATE_VIEW, HttpMethod.POST, _VIEW),
            _spec(Operation.LIST_VIEW, HttpMethod.GET, _REPO + "/views"),
            _spec(Operation.DELETE_VIEW, HttpMethod.DELETE, _VIEW),
            _spec(Operation.GET_VIEW, HttpMethod.GET, _VIEW),
            _spec(Operation.QUERY_POINTS, HttpMethod.POST, _REPO + "/query"),
            _spec(Operation.WRITE_POINTS, HttpMethod.POST, _REPO + "/points"),
        ]
    )
)


def resolve(operation: str) -> OperationSpec | None:
    """Look up an operation by exact name; ``None`` when it is not registered."""

    if not isinstance(operation, str):
        return None
    return OPERATIONS.get(str(operation))


__all__ = [
    "HttpMethod",
    "Operation",
    "OperationSpec",
    "OPERATIONS",
    "resolve",
]
