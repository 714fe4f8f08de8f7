"""JSON request bodies shared by sync/async clients."""

from __future__ import annotations

from collections.abc import Mapping


def _metadata(metadata: Mapping[str, str] | None) -> dict[str, str] | None:
    if metadata is None:
        return None
    if not isinstance(metadata, Mapping):
        raise TypeError("metadata must be Mapping[str, str]")
    normalized: dict[str, str] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("metadata keys and values must be str")
        normalized[key] = value
    return normalized


def _compact(body: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in body.items() if value is not None}


def build_create_repo_body(
    region: str,
    metadata: Mapping[str, str] | None = None,
) -> dict[str, object]:
    if not region:
        raise ValueError("region must not be empty")
    return _compact({"region": region, "metadata": _metadata(metadata)})


def build_metadata_body(metadata: Mapping[str, str]) -> dict[str, object]:
    return {"metadata": _metadata(metadata)}


def build_create_series_body(
    retention: str | None = None,
    metadata: Mapping[str, str] | None = None,
) -> dict[str, object]:
    return _compact({"retention": retention, "metadata": _metadata(metadata)})


def build_create_view_body(
    sql: str,
    retention: str | None = None,
    metadata: Mapping[str, str] | None = None,
) -> dict[str, object]:
    if not sql:
        raise ValueError("sql must not be empty")
    return _compact({"sql": sql, "retention": retention, "metadata": _metadata(metadata)})


def build_query_body(sql: str) -> dict[str, object]:
    if not sql:
        raise ValueError("sql must not be empty")
    return {"sql": sql}


__all__ = [
    "build_create_repo_body",
    "build_metadata_body",
    "build_create_series_body",
    "build_create_view_body",
    "build_query_body",
]
