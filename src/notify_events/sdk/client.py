"""Client -- delivers :class:`Message` objects to the Notify.Events API.

Usage::

    async with Client() as client:
        await client.send(message, "source-token")

Sync usage::

    client = Client()
    client.send_sync(message, "source-token")
    client.close_sync()
"""

from __future__ import annotations

import logging
from contextlib import ExitStack

import httpx

from notify_events.protocol.errors import InvalidArgumentError
from notify_events.protocol.form import build_form
from notify_events.protocol.types import execute_url
from notify_events.sdk._sync import _run_sync, _run_sync_closing
from notify_events.sdk.config import ClientConfig
from notify_events.sdk.message import Message
from notify_events.sdk.resolver import resolve_all
from notify_events.sdk.transport import HTTPTransport, TransportBase

logger = logging.getLogger(__name__)


def _token_hint(token: str) -> str:
    return token[:4] + "..." if len(token) > 4 else "..."


class Client:
    """Owns the configuration and HTTP transport used to send messages.

    No I/O happens in the constructor.  The transport is connected lazily
    on the first send, or explicitly with ``connect()`` /
    ``async with``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        base_url: str | None = None,
        transport: TransportBase | None = None,
    ) -> None:
        if config is None:
            config = ClientConfig(base_url=base_url)
        elif base_url is not None:
            raise ValueError("Pass either config or base_url, not both")
        self._config = config
        self._transport: TransportBase = transport or HTTPTransport(config)
        self._connected = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._connected

    # -- Lifecycle -----------------------------------------------------------

    async def connect(self) -> None:
        """Connect the transport.  Idempotent."""
        if self._connected:
            return
        await self._transport.connect()
        self._connected = True

    async def close(self) -> None:
        """Disconnect the transport and release pooled connections."""
        if self._connected:
            await self._transport.disconnect()
        self._connected = False

    async def __aenter__(self) -> Client:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # -- Delivery ------------------------------------------------------------

    async def send(self, message: Message, token: str) -> httpx.Response:
        """Send *message* to the source identified by *token*.

        Steps:
          1. Snapshot the message
          2. Resolve all images and files concurrently
          3. Compose the multipart form
          4. POST it to the execution endpoint

        Any resolution failure aborts the send before the endpoint is
        contacted.  Transport errors (``httpx.HTTPError``) propagate
        unchanged; nothing is retried.
        """
        if not token:
            raise InvalidArgumentError("Source token must not be empty")

        # Snapshot before the first await so later mutations do not leak in
        title = message.get_title()
        content = message.get_content()
        priority = message.get_priority()
        level = message.get_level()
        image_requests = message.images
        file_requests = message.files
        actions = message.actions

        await self.connect()

        with ExitStack() as stack:
            resolved = await resolve_all(
                image_requests + file_requests, self._transport, stack
            )
            images = resolved[: len(image_requests)]
            files = resolved[len(image_requests) :]

            form = build_form(
                title=title,
                content=content,
                priority=priority,
                level=level,
                images=images,
                files=files,
                actions=actions,
            )
            url = execute_url(self._config.base_url, token)
            response = await self._transport.submit(url, form)

        logger.info(
            "Delivered message to source %s (status %d, %d attachments, %d actions)",
            _token_hint(token),
            response.status_code,
            len(resolved),
            len(actions),
        )
        return response

    # -- Sync wrappers -------------------------------------------------------

    def send_sync(self, message: Message, token: str) -> httpx.Response:
        """Synchronous wrapper for send().

        Each call runs on its own event loop, so the transport is closed
        again before returning.
        """
        return _run_sync_closing(self.send(message, token), self.close)

    def close_sync(self) -> None:
        """Synchronous wrapper for close()."""
        _run_sync(self.close())
