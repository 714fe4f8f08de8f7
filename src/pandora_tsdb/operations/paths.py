"""Structured URL path templates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

from ..core.errors import PathArgumentError

_PARAM_RE = re.compile(r"^\{([a-z_][a-z0-9_]*)\}$")


@dataclass(slots=True, frozen=True)
class PathParam:
    name: str


PathSegment = str | PathParam


@dataclass(slots=True, frozen=True)
class PathTemplate:
    """Path made of literal segments and positional parameter slots.

    ``PathTemplate.parse("/v4/repos/{repo}/series/{series}")`` has two slots;
    ``render("a", "b")`` yields ``/v4/repos/a/series/b``. Rendering with the
    wrong number of arguments fails instead of producing a malformed path.
    """

    segments: tuple[PathSegment, ...]

    @classmethod
    def parse(cls, template: str) -> "PathTemplate":
        if not template.startswith("/"):
            raise ValueError(f"path template must start with '/': {template!r}")
        segments: list[PathSegment] = []
        names: set[str] = set()
        for part in template[1:].split("/"):
            if part == "":
                raise ValueError(f"path template has an empty segment: {template!r}")
            match = _PARAM_RE.match(part)
            if match is not None:
                name = match.group(1)
                if name in names:
                    raise ValueError(f"duplicate path parameter {name!r} in {template!r}")
                names.add(name)
                segments.append(PathParam(name))
                continue
            if "{" in part or "}" in part or "%" in part:
                raise ValueError(f"malformed path segment {part!r} in {template!r}")
            segments.append(part)
        return cls(tuple(segments))

    @property
    def params(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.segments if isinstance(s, PathParam))

    @property
    def arity(self) -> int:
        return len(self.params)

    def render(self, *args: str) -> str:
        """Fill the slots with ``args`` in order.

        Each argument is percent-encoded as a single segment, so ``"a b"``
        renders as ``a%20b`` and ``"a/b"`` as ``a%2Fb`` rather than being
        spliced in verbatim. Identifiers made of unreserved characters are
        unchanged.
        """

        if len(args) != self.arity:
            raise PathArgumentError(
                f"path {self.pattern} expects {self.arity} argument(s), got {len(args)}"
            )
        values = iter(args)
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, PathParam):
                parts.append(_encode_argument(segment.name, next(values)))
            else:
                parts.append(segment)
        return "/" + "/".join(parts)

    @property
    def pattern(self) -> str:
        return "/" + "/".join(
            f"{{{s.name}}}" if isinstance(s, PathParam) else s for s in self.segments
        )

    @property
    def printf_template(self) -> str:
        return "/" + "/".join("%s" if isinstance(s, PathParam) else s for s in self.segments)

    def __str__(self) -> str:
        return self.pattern


def _encode_argument(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise PathArgumentError(f"path argument {name!r} must be str, got {type(value).__name__}")
    if value == "":
        raise PathArgumentError(f"path argument {name!r} must not be empty")
    return quote(value, safe="")


__all__ = [
    "PathParam",
    "PathSegment",
    "PathTemplate",
]
