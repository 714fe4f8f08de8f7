"""Request assembly: operation name + arguments -> request descriptor."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from ..core.error_builder import ErrorBuilder
from ..core.errors import UnknownOperationError
from .registry import HttpMethod, resolve

logger = logging.getLogger("pandora_tsdb")

RequestBody = Union[Mapping[str, Any], Sequence[Any], str, bytes, None]
ResponseTarget = Callable[[Any], Any]


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    """Fully resolved request, ready for a transport to execute."""

    operation: str
    method: HttpMethod
    path: str
    token: str
    error_builder: ErrorBuilder
    body: RequestBody = None
    response_target: ResponseTarget | None = None

    def url_for(self, endpoint: str) -> str:
        return endpoint + self.path


class RequestAssembler:
    """Resolves operations and fills path templates; performs no I/O."""

    def __init__(self, error_builder: ErrorBuilder) -> None:
        self._error_builder = error_builder

    @property
    def error_builder(self) -> ErrorBuilder:
        return self._error_builder

    def build(
        self,
        operation: str,
        *path_args: str,
        token: str,
        body: RequestBody = None,
        response_target: ResponseTarget | None = None,
    ) -> RequestDescriptor:
        spec = resolve(operation)
        if spec is None:
            logger.error("unmatched operation name: %s", operation)
            raise UnknownOperationError(str(operation))

        return RequestDescriptor(
            operation=spec.name,
            method=spec.method,
            path=spec.path.render(*path_args),
            token=token,
            error_builder=self._error_builder,
            body=body,
            response_target=response_target,
        )


__all__ = [
    "RequestBody",
    "ResponseTarget",
    "RequestDescriptor",
    "RequestAssembler",
]
