"""Attachment resolution -- turn user-supplied sources into form payloads.

A source is classified once into a :class:`SourceKind`:

- ``REMOTE_URL``: an http(s) URL string, downloaded through the transport
- ``LOCAL_PATH``: a string / ``os.PathLike`` naming an existing file,
  opened for sequential reading
- ``IN_MEMORY_BUFFER``: ``bytes`` / ``bytearray`` / ``memoryview``
- ``OPEN_STREAM``: a binary file-like object, sent from its current
  position without being rewound

Anything else raises :class:`InvalidAttachmentError`.

Files opened here are registered on the caller's ``ExitStack`` so they
are closed when the send finishes, whatever the outcome.  Streams handed
in by the caller stay open; the caller owns them.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import posixpath
import urllib.parse
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import IO, TYPE_CHECKING, Sequence, Union

from notify_events.protocol.errors import InvalidAttachmentError
from notify_events.protocol.types import DEFAULT_FILENAME
from notify_events.protocol.url import is_valid_http_url
from notify_events.sdk.transport.base import TransportBase

if TYPE_CHECKING:
    from notify_events.sdk.message import AttachmentRequest

logger = logging.getLogger(__name__)

Payload = Union[bytes, IO[bytes]]


class SourceKind(str, Enum):
    """Where an attachment's bytes come from."""

    REMOTE_URL = "remote_url"
    LOCAL_PATH = "local_path"
    IN_MEMORY_BUFFER = "in_memory_buffer"
    OPEN_STREAM = "open_stream"


@dataclass(frozen=True)
class ResolvedAttachment:
    """A send-ready attachment.  Built fresh for every send, never cached."""

    kind: SourceKind
    payload: Payload
    filename: str
    content_type: str


class _RemainingStream:
    """Read-only view of a caller stream from its current position.

    Exposes only ``read()``: without ``seek``, ``tell`` or ``fileno`` the
    multipart encoder can neither rewind the stream nor size it from the
    start, so exactly the unread remainder is sent.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)


async def _open_local(path: str, stack: ExitStack) -> IO[bytes]:
    try:
        handle = await asyncio.to_thread(open, path, "rb")
    except OSError as exc:
        raise InvalidAttachmentError(
            f"Invalid attachment: cannot open {path!r}: {exc.strerror or exc}"
        ) from exc
    return stack.enter_context(handle)


def _is_binary_stream(source: object) -> bool:
    if isinstance(source, io.TextIOBase):
        return False
    return callable(getattr(source, "read", None))


def classify_source(source: object) -> SourceKind:
    """Decide which :class:`SourceKind` *source* is.

    Raises:
        InvalidAttachmentError: If *source* fits none of the accepted shapes.
    """
    if isinstance(source, (str, os.PathLike)):
        text = os.fspath(source)
        if isinstance(text, str):
            if isinstance(source, str) and is_valid_http_url(text):
                return SourceKind.REMOTE_URL
            if os.path.isfile(text):
                return SourceKind.LOCAL_PATH
        raise InvalidAttachmentError(
            f"Invalid attachment: {text!r} is neither an http(s) URL nor an existing file"
        )
    if isinstance(source, (bytes, bytearray, memoryview)):
        return SourceKind.IN_MEMORY_BUFFER
    if _is_binary_stream(source):
        return SourceKind.OPEN_STREAM
    raise InvalidAttachmentError(
        f"Invalid attachment: unsupported source type {type(source).__name__}"
    )


def filename_from_url(url: str) -> str:
    """Return the percent-decoded last path segment of *url*, or the default."""
    path = urllib.parse.urlsplit(url).path
    name = posixpath.basename(urllib.parse.unquote(path))
    return name or DEFAULT_FILENAME


async def resolve_attachment(
    request: AttachmentRequest,
    transport: TransportBase,
    stack: ExitStack,
) -> ResolvedAttachment:
    """Resolve one :class:`AttachmentRequest`.

    An explicit ``request.filename`` always wins; otherwise the name is
    derived from the URL or path, falling back to ``"file.dat"``.
    """
    source = request.source
    kind = classify_source(source)
    filename = request.filename

    if kind is SourceKind.REMOTE_URL:
        payload: Payload = await transport.fetch(source)
        if filename is None:
            filename = filename_from_url(source)
    elif kind is SourceKind.LOCAL_PATH:
        path = os.fspath(source)
        payload = await _open_local(path, stack)
        if filename is None:
            filename = os.path.basename(path) or DEFAULT_FILENAME
    elif kind is SourceKind.IN_MEMORY_BUFFER:
        payload = bytes(source)
    else:
        payload = _RemainingStream(source)

    resolved = ResolvedAttachment(
        kind=kind,
        payload=payload,
        filename=filename or DEFAULT_FILENAME,
        content_type=request.content_type,
    )
    logger.debug(
        "Resolved %s attachment as %r (%s)",
        kind.value,
        resolved.filename,
        resolved.content_type,
    )
    return resolved


async def resolve_all(
    requests: Sequence[AttachmentRequest],
    transport: TransportBase,
    stack: ExitStack,
) -> list[ResolvedAttachment]:
    """Resolve every request concurrently, preserving input order.

    All resolutions run to completion before the first failure (if any)
    is re-raised, so every file opened along the way is already on
    *stack* when the caller unwinds it.
    """
    if not requests:
        return []

    results = await asyncio.gather(
        *(resolve_attachment(r, transport, stack) for r in requests),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
