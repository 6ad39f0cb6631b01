"""Action -- an interactive button attached to a message.

The receiving channel renders each action as a button; pressing it makes
the service call ``callback_url`` with the given method, headers and body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from notify_events.protocol.errors import InvalidArgumentError
from notify_events.protocol.types import DEFAULT_CALLBACK_METHOD
from notify_events.protocol.url import is_valid_http_url


@dataclass(frozen=True)
class Action:
    """A validated action definition.

    ``callback_headers`` is copied into a read-only mapping on construction
    so the caller's dict can be reused without affecting the action.
    """

    name: str
    title: str
    callback_url: Optional[str] = None
    callback_method: str = DEFAULT_CALLBACK_METHOD
    callback_headers: Mapping[str, str] = field(default_factory=dict)
    callback_content: str = ""

    def __post_init__(self) -> None:
        if self.callback_url is not None and not is_valid_http_url(self.callback_url):
            raise InvalidArgumentError(
                f"Invalid callback url: {self.callback_url!r}"
            )
        object.__setattr__(
            self, "callback_headers", MappingProxyType(dict(self.callback_headers or {}))
        )
