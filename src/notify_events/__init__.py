"""Notify.Events -- Python client for the Notify.Events notification service.

Top-level convenience re-exports::

    from notify_events import Message, Client, Priority, Level
"""

__version__ = "1.0.0"

from notify_events.protocol.errors import (
    InvalidArgumentError,
    InvalidAttachmentError,
    NotifyEventsError,
)
from notify_events.protocol.types import Level, Priority
from notify_events.sdk.client import Client
from notify_events.sdk.config import ClientConfig
from notify_events.sdk.message import Message

__all__ = [
    "__version__",
    "Client",
    "ClientConfig",
    "InvalidArgumentError",
    "InvalidAttachmentError",
    "Level",
    "Message",
    "NotifyEventsError",
    "Priority",
]
