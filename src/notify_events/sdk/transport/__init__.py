"""Notify.Events SDK transport layer."""

from notify_events.sdk.transport.base import TransportBase
from notify_events.sdk.transport.http import HTTPTransport

__all__ = [
    "TransportBase",
    "HTTPTransport",
]
