"""Abstract transport interface for the Notify.Events API."""

from __future__ import annotations

import abc
from typing import Sequence

import httpx

from notify_events.protocol.form import FormPart


class TransportBase(abc.ABC):
    """Abstract HTTP collaborator used by :class:`~notify_events.sdk.client.Client`.

    The transport owns connection pooling, keep-alive and redirect
    handling.  It performs no retries: every failure is raised to the
    caller as the underlying ``httpx`` exception.
    """

    @abc.abstractmethod
    async def connect(self) -> None:
        """Open pooled connections / create the underlying client."""

    @abc.abstractmethod
    async def disconnect(self) -> None:
        """Release pooled connections."""

    @abc.abstractmethod
    async def submit(self, url: str, form: Sequence[FormPart]) -> httpx.Response:
        """POST *form* as multipart/form-data to *url*."""

    @abc.abstractmethod
    async def fetch(self, url: str) -> bytes:
        """Download *url* (bounded redirects and timeout) and return the body."""
