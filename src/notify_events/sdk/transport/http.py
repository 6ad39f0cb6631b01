"""HTTP transport via httpx with connection pooling."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from notify_events.protocol.form import FormPart
from notify_events.sdk.config import ClientConfig
from notify_events.sdk.transport.base import TransportBase

logger = logging.getLogger(__name__)


class HTTPTransport(TransportBase):
    """HTTP transport using a shared httpx AsyncClient.

    A single ``httpx.AsyncClient`` is created in ``connect()`` and
    reused for all requests (connection pooling).  Call ``disconnect()``
    to close it.

    *http_transport* replaces httpx's network transport, e.g. with an
    ``httpx.MockTransport``.  Timeouts, redirects and headers still apply.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http_transport = http_transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the shared httpx AsyncClient.  Idempotent."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            headers={"User-Agent": self._config.user_agent},
            timeout=self._config.timeout,
            follow_redirects=True,
            max_redirects=self._config.max_redirects,
            transport=self._http_transport,
            limits=httpx.Limits(
                max_connections=100,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )

    async def disconnect(self) -> None:
        """Close the httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("HTTPTransport not connected. Call connect() first.")
        return self._client

    async def submit(self, url: str, form: Sequence[FormPart]) -> httpx.Response:
        """POST the multipart form to *url*.

        Raises ``httpx.HTTPStatusError`` on 4xx/5xx.
        """
        client = self._require_client()
        resp = await client.post(url, files=list(form))
        resp.raise_for_status()
        return resp

    async def fetch(self, url: str) -> bytes:
        """GET *url* and return the full body.

        Uses ``fetch_timeout`` instead of the client timeout.  Raises
        ``httpx.TooManyRedirects`` past ``max_redirects`` and
        ``httpx.HTTPStatusError`` on 4xx/5xx.
        """
        client = self._require_client()
        async with client.stream("GET", url, timeout=self._config.fetch_timeout) as resp:
            resp.raise_for_status()
            body = await resp.aread()
        logger.debug("Fetched %s (%d bytes)", url, len(body))
        return body
