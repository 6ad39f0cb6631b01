"""Tests for HTTPTransport against an in-process fake relay (httpx.MockTransport)."""

from __future__ import annotations

import httpx
import pytest

from notify_events.sdk.config import ClientConfig
from notify_events.sdk.transport.http import HTTPTransport


class TestHTTPTransportLifecycle:
    async def test_not_connected_raises(self):
        transport = HTTPTransport(ClientConfig(base_url="https://notify.test"))
        with pytest.raises(RuntimeError, match="not connected"):
            await transport.fetch("https://example.com/a.png")
        with pytest.raises(RuntimeError, match="not connected"):
            await transport.submit("https://notify.test/x", [])

    async def test_connect_and_disconnect(self):
        transport = HTTPTransport(ClientConfig(base_url="https://notify.test"))
        await transport.connect()
        try:
            assert transport.is_connected
            client = transport._client
            await transport.connect()
            assert transport._client is client
            assert client.max_redirects == 5
            assert client.follow_redirects is True
            assert client.headers["User-Agent"].startswith("notify-events-python/")
        finally:
            await transport.disconnect()
        assert not transport.is_connected
        await transport.disconnect()


class TestHTTPTransportSubmit:
    async def test_submit_multipart(self, http_transport, fake_relay):
        form = [
            ("content", (None, "hello", None)),
            ("files[]", ("a.bin", b"AAA", "application/octet-stream")),
        ]
        resp = await http_transport.submit("https://notify.test/execute", form)
        assert resp.status_code == 200

        url, parts = fake_relay.submissions[0]
        assert url == "https://notify.test/execute"
        assert [(p.name, p.filename, p.body) for p in parts] == [
            ("content", None, b"hello"),
            ("files[]", "a.bin", b"AAA"),
        ]
        assert parts[1].content_type == "application/octet-stream"

    async def test_submit_error_status_raises(self, http_transport, fake_relay):
        fake_relay.submit_status = 500
        with pytest.raises(httpx.HTTPStatusError):
            await http_transport.submit(
                "https://notify.test/execute", [("content", (None, "x", None))]
            )


class TestHTTPTransportFetch:
    async def test_fetch_body(self, http_transport, fake_relay):
        fake_relay.downloads["https://example.com/pic.png"] = b"\x89PNG"
        assert await http_transport.fetch("https://example.com/pic.png") == b"\x89PNG"

    async def test_fetch_follows_redirects(self, http_transport, fake_relay):
        fake_relay.redirects["https://example.com/old.png"] = "https://cdn.example.com/new.png"
        fake_relay.downloads["https://cdn.example.com/new.png"] = b"moved"
        assert await http_transport.fetch("https://example.com/old.png") == b"moved"

    async def test_fetch_redirect_limit(self, http_transport, fake_relay):
        for i in range(6):
            fake_relay.redirects[f"https://example.com/{i}"] = f"https://example.com/{i + 1}"
        fake_relay.downloads["https://example.com/6"] = b"too far"
        with pytest.raises(httpx.TooManyRedirects):
            await http_transport.fetch("https://example.com/0")

    async def test_fetch_not_found_raises(self, http_transport):
        with pytest.raises(httpx.HTTPStatusError):
            await http_transport.fetch("https://example.com/missing.png")


class TestHTTPTransportTimeouts:
    async def test_fetch_uses_fetch_timeout(self, http_transport, fake_relay):
        fake_relay.downloads["https://example.com/a.png"] = b"PNG"
        await http_transport.fetch("https://example.com/a.png")
        timeout = fake_relay.requests[-1].extensions["timeout"]
        assert timeout["read"] == 10.0
        assert timeout["connect"] == 10.0

    async def test_submit_uses_client_timeout(self, http_transport, fake_relay):
        await http_transport.submit(
            "https://notify.test/x", [("content", (None, "hi", None))]
        )
        timeout = fake_relay.requests[-1].extensions["timeout"]
        assert timeout["read"] == 30.0
        assert timeout["connect"] == 30.0

    async def test_configured_timeouts_are_applied(self, fake_relay):
        config = ClientConfig(base_url="https://notify.test", timeout=7, fetch_timeout=2)
        transport = HTTPTransport(
            config, http_transport=httpx.MockTransport(fake_relay.handler)
        )
        fake_relay.downloads["https://example.com/a.png"] = b"PNG"
        await transport.connect()
        try:
            await transport.fetch("https://example.com/a.png")
            await transport.submit("https://notify.test/x", [("content", (None, "hi", None))])
        finally:
            await transport.disconnect()
        get, post = fake_relay.requests
        assert get.extensions["timeout"]["read"] == 2
        assert post.extensions["timeout"]["read"] == 7
