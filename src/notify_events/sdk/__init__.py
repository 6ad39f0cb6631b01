"""Notify.Events SDK -- build and deliver messages."""

from notify_events.sdk.client import Client
from notify_events.sdk.config import ClientConfig
from notify_events.sdk.message import AttachmentRequest, Message

__all__ = ["AttachmentRequest", "Client", "ClientConfig", "Message"]
