"""Shared fixtures for Notify.Events SDK tests."""

from __future__ import annotations

import json
import re
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from notify_events.sdk.client import Client
from notify_events.sdk.config import ClientConfig
from notify_events.sdk.transport.http import HTTPTransport

_DISPOSITION_RE = re.compile(rb'name="(?P<name>[^"]*)"(?:; filename="(?P<filename>[^"]*)")?')


@dataclass
class FormPart:
    name: str
    filename: str | None
    content_type: str | None
    body: bytes


def parse_multipart(request: httpx.Request) -> list[FormPart]:
    """Split a multipart/form-data request body into its parts, in order."""
    content_type = request.headers["content-type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1].encode()

    parts = []
    for chunk in request.content.split(b"--" + boundary)[1:-1]:
        head, _, body = chunk[2:-2].partition(b"\r\n\r\n")
        disposition = _DISPOSITION_RE.search(head)
        assert disposition is not None
        ctype = re.search(rb"Content-Type: ([^\r\n]+)", head)
        filename = disposition.group("filename")
        parts.append(
            FormPart(
                name=disposition.group("name").decode(),
                filename=filename.decode() if filename is not None else None,
                content_type=ctype.group(1).decode() if ctype else None,
                body=body,
            )
        )
    return parts


@dataclass
class FakeRelay:
    """In-process stand-in for the Notify.Events API and attachment hosts.

    ``downloads`` maps URL -> body (or -> status code) for GET requests;
    every POST is recorded in ``submissions`` with its parsed form.
    """

    downloads: dict[str, bytes | int] = field(default_factory=dict)
    redirects: dict[str, str] = field(default_factory=dict)
    submit_status: int = 200
    requests: list[httpx.Request] = field(default_factory=list)
    submissions: list[tuple[str, list[FormPart]]] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if request.method == "POST":
            self.submissions.append((url, parse_multipart(request)))
            return httpx.Response(self.submit_status, json={"status": "ok"})
        if url in self.redirects:
            return httpx.Response(302, headers={"Location": self.redirects[url]})
        body = self.downloads.get(url, 404)
        if isinstance(body, int):
            return httpx.Response(body)
        return httpx.Response(200, content=body)

    @property
    def fetched(self) -> list[str]:
        return [str(r.url) for r in self.requests if r.method == "GET"]


@pytest.fixture()
def fake_relay():
    return FakeRelay()


@pytest.fixture()
def client_config():
    return ClientConfig(base_url="https://notify.test")


@pytest.fixture()
async def http_transport(fake_relay, client_config):
    """An HTTPTransport whose httpx client talks to ``fake_relay``."""
    transport = HTTPTransport(
        client_config, http_transport=httpx.MockTransport(fake_relay.handler)
    )
    await transport.connect()

    yield transport
    await transport.disconnect()


@pytest.fixture()
async def client(http_transport, client_config):
    c = Client(client_config, transport=http_transport)
    yield c
    await c.close()


class _KeepAliveHandler(BaseHTTPRequestHandler):
    """Answers every POST with 200 and keeps the connection open."""

    protocol_version = "HTTP/1.1"

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        self.server.paths.append(self.path)
        body = json.dumps({"status": "ok"}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture()
def local_relay(monkeypatch):
    """A real HTTP/1.1 server on 127.0.0.1.  Yields ``(base_url, paths)``."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    server = ThreadingHTTPServer(("127.0.0.1", 0), _KeepAliveHandler)
    server.daemon_threads = True
    server.paths = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}", server.paths
    server.shutdown()
    server.server_close()
