"""Message -- the fluent builder for a Notify.Events notification.

Usage::

    message = (
        Message("Disk almost full", title="db-01")
        .set_priority(Priority.HIGH)
        .set_level(Level.WARNING)
        .add_file("/var/log/disk.log")
        .add_image("https://example.com/graph.png")
        .add_action("ack", "Acknowledge", "https://example.com/ack")
    )
    await message.send("source-token")

Priority, level and action callback URLs are validated when they are
set.  Attachment sources are only checked when the message is sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

from notify_events.protocol.action import Action
from notify_events.protocol.types import (
    DEFAULT_CALLBACK_METHOD,
    DEFAULT_CONTENT_TYPE,
    Level,
    Priority,
    parse_level,
    parse_priority,
)
from notify_events.sdk._sync import _run_sync

if TYPE_CHECKING:
    import httpx

    from notify_events.sdk.client import Client


@dataclass(frozen=True)
class AttachmentRequest:
    """An attachment as the caller described it.

    ``filename=None`` means "not supplied": the name is then derived from
    the URL or path at send time, or defaults to ``"file.dat"``.
    """

    source: Any
    filename: Optional[str] = None
    content_type: str = DEFAULT_CONTENT_TYPE


class Message:
    """A notification message.

    Every setter/adder returns ``self`` so calls can be chained.  A message
    may be sent several times in sequence but must not be mutated while a
    send is in flight.
    """

    PRIORITY_LOWEST = Priority.LOWEST
    PRIORITY_LOW = Priority.LOW
    PRIORITY_NORMAL = Priority.NORMAL
    PRIORITY_HIGH = Priority.HIGH
    PRIORITY_HIGHEST = Priority.HIGHEST

    LEVEL_VERBOSE = Level.VERBOSE
    LEVEL_INFO = Level.INFO
    LEVEL_NOTICE = Level.NOTICE
    LEVEL_WARNING = Level.WARNING
    LEVEL_ERROR = Level.ERROR
    LEVEL_SUCCESS = Level.SUCCESS

    def __init__(
        self,
        content: str = "",
        title: str = "",
        priority: Priority | str = Priority.NORMAL,
        level: Level | str = Level.INFO,
    ) -> None:
        self._title: str = ""
        self._content: str = ""
        self._priority: Priority = Priority.NORMAL
        self._level: Level = Level.INFO
        self._files: list[AttachmentRequest] = []
        self._images: list[AttachmentRequest] = []
        self._actions: list[Action] = []

        self.set_content(content).set_title(title).set_priority(priority).set_level(level)

    def __repr__(self) -> str:
        return (
            f"Message(title={self._title!r}, priority={self._priority.value!r}, "
            f"level={self._level.value!r}, files={len(self._files)}, "
            f"images={len(self._images)}, actions={len(self._actions)})"
        )

    # -- Scalar fields ---------------------------------------------------------

    def set_title(self, title: str) -> Message:
        self._title = title
        return self

    def get_title(self) -> str:
        return self._title

    def set_content(self, content: str) -> Message:
        self._content = content
        return self

    def get_content(self) -> str:
        return self._content

    def set_priority(self, priority: Priority | str) -> Message:
        """Set the priority.

        Recipients that support priorities highlight the message accordingly.

        Raises:
            InvalidArgumentError: If *priority* is not a known priority.
        """
        self._priority = parse_priority(priority)
        return self

    def get_priority(self) -> Priority:
        return self._priority

    def set_level(self, level: Level | str) -> Message:
        """Set the level.

        Recipients that render levels differently (colour, icon) use it.

        Raises:
            InvalidArgumentError: If *level* is not a known level.
        """
        self._level = parse_level(level)
        return self

    def get_level(self) -> Level:
        return self._level

    # -- Attachments and actions ---------------------------------------------

    def add_file(
        self,
        source: Any,
        filename: str | None = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Message:
        """Attach a file.

        *source* may be a local path, an http(s) URL, a bytes-like buffer
        or a binary stream.  It is not inspected until the message is sent.
        """
        self._files.append(AttachmentRequest(source, filename, content_type))
        return self

    def add_image(
        self,
        source: Any,
        filename: str | None = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Message:
        """Attach an image.  Accepts the same sources as :meth:`add_file`."""
        self._images.append(AttachmentRequest(source, filename, content_type))
        return self

    def add_action(
        self,
        name: str,
        title: str,
        callback_url: str | None = None,
        callback_method: str = DEFAULT_CALLBACK_METHOD,
        callback_headers: Mapping[str, str] | None = None,
        callback_content: str = "",
    ) -> Message:
        """Add an action button.

        Raises:
            InvalidArgumentError: If *callback_url* is given and is not a
                valid http(s) URL without credentials.
        """
        self._actions.append(
            Action(
                name=name,
                title=title,
                callback_url=callback_url,
                callback_method=callback_method,
                callback_headers=callback_headers or {},
                callback_content=callback_content,
            )
        )
        return self

    @property
    def files(self) -> tuple[AttachmentRequest, ...]:
        return tuple(self._files)

    @property
    def images(self) -> tuple[AttachmentRequest, ...]:
        return tuple(self._images)

    @property
    def actions(self) -> tuple[Action, ...]:
        return tuple(self._actions)

    # -- Delivery ------------------------------------------------------------

    async def send(self, token: str, *, client: Client | None = None) -> httpx.Response:
        """Send the message to the channel behind source *token*.

        The token is shown when a source is connected to a channel on the
        Notify.Events side.  Without *client*, a temporary :class:`Client`
        with default configuration is used for this one call.
        """
        if client is not None:
            return await client.send(self, token)

        from notify_events.sdk.client import Client

        async with Client() as temporary:
            return await temporary.send(self, token)

    def send_sync(self, token: str, *, client: Client | None = None) -> httpx.Response:
        """Synchronous wrapper for send().

        A given *client* is closed again before returning, like
        :meth:`Client.send_sync`, so it can be reused for the next call.
        """
        if client is not None:
            return client.send_sync(self, token)
        return _run_sync(self.send(token))
