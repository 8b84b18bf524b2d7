"""Tests for the httpx document transport and its factory."""

from __future__ import annotations

import json

import httpx
import pytest

from crpt_client.adapters.http import HttpxDocumentTransport, create_document_transport
from crpt_client.core.config import ApiSettings
from crpt_client.core.errors import InvalidConfigurationError, NetworkAppError, ServerAppError

BASE_URL = "https://crpt.test"
DOCUMENT_PATH = "/api/v1/incoming-documents/unsigned-events"


def _transport(handler) -> HttpxDocumentTransport:
    return HttpxDocumentTransport(
        base_url=BASE_URL,
        document_path=DOCUMENT_PATH,
        transport=httpx.MockTransport(handler),
    )


def test_posts_json_with_bearer_credential() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"value":"accepted"}')

    transport = _transport(handler)
    body = transport.post_document(b'{"doc_id":"1"}', "token-abc")
    transport.close()

    assert body == '{"value":"accepted"}'
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}{DOCUMENT_PATH}"
    assert request.headers["Authorization"] == "Bearer token-abc"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"doc_id": "1"}


def test_empty_success_body_returns_empty_string() -> None:
    with _transport(lambda request: httpx.Response(204)) as transport:
        assert transport.post_document(b"{}", "token") == ""


@pytest.mark.parametrize("status_code", [400, 401, 403, 429, 500, 503])
def test_non_success_status_raises_server_error(status_code: int) -> None:
    with _transport(lambda request: httpx.Response(status_code, text="nope")) as transport:
        with pytest.raises(ServerAppError) as exc_info:
            transport.post_document(b"{}", "token")

    error = exc_info.value
    assert error.code == "server_error"
    assert error.details is not None
    assert error.details["http_status"] == status_code
    assert error.details["context"]["body"] == "nope"


def test_connection_failure_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _transport(handler) as transport:
        with pytest.raises(NetworkAppError) as exc_info:
            transport.post_document(b"{}", "token")

    assert exc_info.value.code == "network_error"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_timeout_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _transport(handler) as transport:
        with pytest.raises(NetworkAppError):
            transport.post_document(b"{}", "token")


def test_factory_builds_transport_from_settings() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="ok")

    cfg = ApiSettings(base_url="https://example.test", document_path="/docs")
    transport = create_document_transport(cfg, transport=httpx.MockTransport(handler))

    assert isinstance(transport, HttpxDocumentTransport)
    assert transport.post_document(b"{}", "token") == "ok"
    assert seen == ["https://example.test/docs"]
    transport.close()


@pytest.mark.parametrize("base_url", ["dev.edo.crpt.tech", "ftp://crpt.test", ""])
def test_factory_rejects_non_http_base_url(base_url: str) -> None:
    with pytest.raises(InvalidConfigurationError):
        create_document_transport(ApiSettings(base_url=base_url))


def test_factory_wraps_unreadable_ca_bundle(tmp_path) -> None:
    missing = tmp_path / "missing-ca.pem"
    cfg = ApiSettings(base_url="https://crpt.test", ca_bundle_path=str(missing))

    with pytest.raises(InvalidConfigurationError) as exc_info:
        create_document_transport(cfg)

    error = exc_info.value
    assert error.code == "invalid_configuration"
    assert error.details is not None
    assert error.details["field"] == "ca_bundle_path"
    assert isinstance(error.__cause__, OSError)


def test_factory_wraps_malformed_ca_bundle(tmp_path) -> None:
    bogus = tmp_path / "bogus-ca.pem"
    bogus.write_text("not a certificate", encoding="utf-8")
    cfg = ApiSettings(base_url="https://crpt.test", ca_bundle_path=str(bogus))

    with pytest.raises(InvalidConfigurationError) as exc_info:
        create_document_transport(cfg)

    assert exc_info.value.details["field"] == "ca_bundle_path"
