"""Operation registry and request assembly."""

from .assembler import RequestAssembler, RequestDescriptor
from .paths import PathParam, PathTemplate
from .registry import OPERATIONS, HttpMethod, Operation, OperationSpec, resolve

__all__ = [
    "HttpMethod",
    "Operation",
    "OperationSpec",
    "OPERATIONS",
    "PathParam",
    "PathTemplate",
    "RequestAssembler",
    "RequestDescriptor",
    "resolve",
]
