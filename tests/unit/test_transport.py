from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import httpx
import pytest

from pandora_tsdb.config import TsdbClientConfig
from pandora_tsdb.core.error_builder import TsdbErrorBuilder
from pandora_tsdb.core.errors import (
    TsdbApiError,
    TsdbNotFoundError,
    TsdbTransportError,
)
from pandora_tsdb.core.transport import SyncTransport
from pandora_tsdb.operations.assembler import RequestAssembler
from tests.shared.transport import RecordingErrorBuilder, Response, SyncSequencedClient


@pytest.fixture
def assembler() -> RequestAssembler:
    return RequestAssembler(TsdbErrorBuilder())


def test_execute_sends_method_path_token_and_json_body(
    config: TsdbClientConfig,
    assembler: RequestAssembler,
):
    client = SyncSequencedClient([Response(200, b'{"repo":"r"}')])
    transport = SyncTransport(config, client=client)
    descriptor = assembler.build("CreateRepo", "r", token="Pandora tok", body={"region": "nb"})

    assert transport.execute(descriptor) == {"repo": "r"}

    call = client.calls[0]
    assert call.method == "POST"
    assert call.url == "/v4/repos/r"
    assert call.headers["Authorization"] == "Pandora tok"
    assert call.headers["Content-Type"] == "application/json"
    assert json.loads(call.content) == {"region": "nb"}


def test_execute_sends_text_body_and_omits_empty_token(
    config: TsdbClientConfig,
    assembler: RequestAssembler,
):
    client = SyncSequencedClient([Response(200)])
    transport = SyncTransport(config, client=client)
    descriptor = assembler.build("WritePoints", "r", token="", body="cpu,host=a value=1")

    assert transport.execute(descriptor) is None

    call = client.calls[0]
    assert "Authorization" not in call.headers
    assert call.headers["Content-Type"] == "text/plain"
    assert call.content == b"cpu,host=a value=1"


def test_execute_without_body_sends_no_content(
    config: TsdbClientConfig,
    assembler: RequestAssembler,
):
    client = SyncSequencedClient([Response(200, b"[]")])
    transport = SyncTransport(config, client=client)

    assert transport.execute(assembler.build("ListRepos", token="t")) == []
    assert client.calls[0].content is None
    assert "Content-Type" not in client.calls[0].headers


def test_execute_applies_response_target(config: TsdbClientConfig, assembler: RequestAssembler):
    client = SyncSequencedClient([Response(200, b'{"repos":[{"name":"a"},{"name":"b"}]}')])
    transport = SyncTransport(config, client=client)
    descriptor = assembler.build(
        "ListRepos",
        token="t",
        response_target=lambda payload: [repo["name"] for repo in payload["repos"]],
    )
    assert transport.execute(descriptor) == ["a", "b"]


def test_execute_builds_error_with_descriptor_error_builder(config: TsdbClientConfig):
    builder = RecordingErrorBuilder()
    client = SyncSequencedClient([Response(409, b'{"error":"exists"}', {"X-Reqid": "abc"})])
    transport = SyncTransport(config, client=client)
    descriptor = RequestAssembler(builder).build("CreateRepo", "r", token="t")

    with pytest.raises(TsdbApiError, match="recorded"):
        transport.execute(descriptor)
    assert builder.calls == [(409, b'{"error":"exists"}', "abc")]


def test_execute_wraps_network_errors_without_retry(
    config: TsdbClientConfig,
    assembler: RequestAssembler,
):
    client = SyncSequencedClient([RuntimeError("network down"), Response(200)])
    transport = SyncTransport(config, client=client)

    with pytest.raises(TsdbTransportError):
        transport.execute(assembler.build("ListRepos", token="t"))
    assert len(client.calls) == 1


def test_execute_rejects_invalid_json(config: TsdbClientConfig, assembler: RequestAssembler):
    transport = SyncTransport(config, client=SyncSequencedClient([Response(200, b"<html>")]))
    with pytest.raises(TsdbTransportError, match="not valid JSON"):
        transport.execute(assembler.build("ListRepos", token="t"))


def test_execute_after_close_raises(config: TsdbClientConfig, assembler: RequestAssembler):
    client = SyncSequencedClient([])
    transport = SyncTransport(config, client=client)
    transport.close()
    with pytest.raises(TsdbTransportError):
        transport.execute(assembler.build("ListRepos", token="t"))
    # injected clients are owned by the caller
    assert client.closed is False


def test_execute_with_httpx_mock_transport(config: TsdbClientConfig, assembler: RequestAssembler):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/v4/repos/missing":
            return httpx.Response(404, json={"error": "repo not found"}, headers={"X-Reqid": "r1"})
        return httpx.Response(200, json={"name": "r"})

    http_client = httpx.Client(
        base_url=config.endpoint,
        transport=httpx.MockTransport(handler),
    )
    transport = SyncTransport(config, client=http_client)
    try:
        assert transport.execute(assembler.build("GetRepo", "r", token="tok")) == {"name": "r"}
        with pytest.raises(TsdbNotFoundError) as exc_info:
            transport.execute(assembler.build("GetRepo", "missing", token="tok"))
    finally:
        http_client.close()

    assert exc_info.value.message == "repo not found"
    assert exc_info.value.request_id == "r1"
    assert str(seen[0].url) == "https://tsdb.example.com/v4/repos/r"
    assert seen[0].headers["Authorization"] == "tok"


def test_transport_can_initialize_and_close_with_real_httpx_client(config: TsdbClientConfig):
    transport = SyncTransport(config)
    transport.close()
    transport.close()


def test_execute_unserializable_body_is_not_reported_as_network_error(
    config: TsdbClientConfig,
    assembler: RequestAssembler,
    caplog: pytest.LogCaptureFixture,
):
    client = SyncSequencedClient([Response(200)])
    transport = SyncTransport(config, client=client)
    descriptor = assembler.build(
        "CreateRepo",
        "r",
        token="t",
        body={"when": datetime(2024, 1, 1, tzinfo=timezone.utc)},
    )

    with caplog.at_level(logging.ERROR, logger="pandora_tsdb"):
        with pytest.raises(TypeError):
            transport.execute(descriptor)
    assert client.calls == []
    assert "network error" not in caplog.text
