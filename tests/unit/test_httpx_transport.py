# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import ssl

import httpx
import pytest

from apiclient.config import TransportSettings
from apiclient.errors import InvalidOptionError
from apiclient.http.httpx_transport import HttpxTransport
from apiclient.http.models import HttpRequest
from apiclient.http.transport import create_default_transport


class FakeHttpxClient:
    instances: list["FakeHttpxClient"] = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.calls = []
        self.closed = False
        FakeHttpxClient.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ARG002
        self.closed = True

    def request(self, method, url, headers=None, content=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "content": content})

        class Resp:
            status_code = 200
            headers = httpx.Headers({"Content-Type": "application/json; charset=utf-8"})
            encoding = "utf-8"
            content = '{"ok":"é"}'.encode()

            def __init__(self, response_url: str):
                self.url = httpx.URL(response_url)

        return Resp(url)


@pytest.fixture
def fake_client(monkeypatch):
    FakeHttpxClient.instances = []
    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    return FakeHttpxClient


def test_httpx_transport_success_uses_settings_defaults(fake_client):
    transport = HttpxTransport(TransportSettings(timeout=4.0, user_agent="UA/1.0", follow_redirects=False))
    resp = transport.request(
        HttpRequest(url="http://example/path", method="POST", headers=[("X", "1")], body=b"payload")
    )
    assert resp.ok is True
    assert resp.status_code == 200
    assert resp.text == '{"ok":"é"}'
    assert resp.url == "http://example/path"

    created = fake_client.instances[0]
    assert created.kwargs["timeout"] == 4.0
    assert created.kwargs["follow_redirects"] is False
    assert created.kwargs["verify"] is True
    assert created.kwargs["headers"] == {"User-Agent": "UA/1.0"}
    assert created.calls[0] == {"method": "POST", "url": "http://example/path", "headers": [("X", "1")], "content": b"payload"}
    assert created.closed is True


def test_httpx_transport_opens_a_client_per_request(fake_client):
    transport = HttpxTransport(TransportSettings())
    transport.request(HttpRequest(url="http://example/a"))
    transport.request(HttpRequest(url="http://example/b"))
    assert len(fake_client.instances) == 2
    assert all(client.closed for client in fake_client.instances)


def test_httpx_transport_options_override_settings(fake_client):
    transport = HttpxTransport(TransportSettings(timeout=10.0))
    options = {
        "timeout": 1.0,
        "follow_redirects": True,
        "cert": ("/c.pem", "/k.pem"),
        "auth": ("user", "pass"),
        "url": "ignored",
        "stream": False,
    }
    transport.request(HttpRequest(url="http://example", options=options))
    kwargs = fake_client.instances[0].kwargs
    assert kwargs["timeout"] == 1.0
    assert kwargs["follow_redirects"] is True
    assert kwargs["cert"] == ("/c.pem", "/k.pem")
    assert kwargs["auth"] == ("user", "pass")
    assert "url" not in kwargs
    assert "stream" not in kwargs


def test_httpx_transport_ca_bundle_becomes_ssl_context(fake_client, monkeypatch):
    seen = {}

    def fake_context(cafile=None):
        seen["cafile"] = cafile
        return "ctx"

    monkeypatch.setattr(ssl, "create_default_context", fake_context)
    transport = HttpxTransport(TransportSettings())
    transport.request(HttpRequest(url="https://example", options={"ca_bundle": "/certs/WE1.crt"}))
    assert seen["cafile"] == "/certs/WE1.crt"
    assert fake_client.instances[0].kwargs["verify"] == "ctx"

    transport.request(HttpRequest(url="https://example", options={"ca_bundle": "/certs/WE1.crt", "verify": False}))
    assert fake_client.instances[1].kwargs["verify"] is False


def test_httpx_transport_settings_ca_bundle_and_verify_flag(fake_client, monkeypatch):
    monkeypatch.setattr(ssl, "create_default_context", lambda cafile=None: f"ctx:{cafile}")
    HttpxTransport(TransportSettings(ca_bundle="/env/ca.pem")).request(HttpRequest(url="https://example"))
    HttpxTransport(TransportSettings(verify_ssl=False, ca_bundle="/env/ca.pem")).request(HttpRequest(url="https://example"))
    assert fake_client.instances[0].kwargs["verify"] == "ctx:/env/ca.pem"
    assert fake_client.instances[1].kwargs["verify"] is False


def test_httpx_transport_rejects_unknown_options(fake_client):
    transport = HttpxTransport(TransportSettings())
    with pytest.raises(InvalidOptionError) as excinfo:
        transport.request(HttpRequest(url="http://example", options={"CURLOPT_CAINFO": "/ca", "retries": 3}))
    assert "CURLOPT_CAINFO" in str(excinfo.value)
    assert fake_client.instances == []


def test_httpx_transport_converts_transport_errors(monkeypatch):
    class ErrorClient(FakeHttpxClient):
        def request(self, *_, **__):
            raise httpx.ConnectTimeout("timed out")

    monkeypatch.setattr(httpx, "Client", ErrorClient)
    resp = HttpxTransport(TransportSettings()).request(HttpRequest(url="http://example"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_message == "timed out"
    assert resp.error_type == "ConnectTimeout"
    assert isinstance(resp.error, httpx.ConnectTimeout)


def test_httpx_transport_with_mock_transport_reports_status():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["user-agent"] == "UA/2.0"
        return httpx.Response(418, text="teapot")

    transport = HttpxTransport(
        TransportSettings(user_agent="UA/2.0"),
        httpx_transport=httpx.MockTransport(handler),
    )
    resp = transport.request(HttpRequest(url="http://example/brew", method="GET"))
    assert resp.ok is True
    assert resp.status_code == 418
    assert resp.text == "teapot"


def test_create_default_transport_uses_settings():
    settings = TransportSettings(timeout=3.0)
    transport = create_default_transport(settings)
    assert isinstance(transport, HttpxTransport)
    assert transport.settings is settings


def test_httpx_transport_missing_ca_bundle_is_transport_failure(fake_client):
    resp = HttpxTransport(TransportSettings()).request(
        HttpRequest(url="https://example", options={"ca_bundle": "/definitely/missing/ca.pem"})
    )
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_type == "FileNotFoundError"
    assert fake_client.instances == []


def test_httpx_transport_wraps_bad_option_values(monkeypatch):
    class RejectingClient(FakeHttpxClient):
        def __init__(self, **kwargs):
            raise TypeError("timeout must be a number")

    monkeypatch.setattr(httpx, "Client", RejectingClient)
    with pytest.raises(InvalidOptionError) as excinfo:
        HttpxTransport(TransportSettings()).request(HttpRequest(url="http://example", options={"timeout": "soon"}))
    assert "timeout must be a number" in str(excinfo.value)
