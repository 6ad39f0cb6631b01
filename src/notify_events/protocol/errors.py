"""Notify.Events exception hierarchy.

All library-specific exceptions inherit from :class:`NotifyEventsError`.
Transport failures are *not* wrapped: they surface as the ``httpx``
exceptions raised by the HTTP layer.
"""

from __future__ import annotations


class NotifyEventsError(Exception):
    """Base exception for all Notify.Events client errors."""


class InvalidArgumentError(NotifyEventsError, ValueError):
    """Raised when a setter or builder call receives an unacceptable value.

    Subclasses ``ValueError`` so callers that already catch ``ValueError``
    for argument validation keep working.
    """


class InvalidAttachmentError(InvalidArgumentError):
    """Raised at send time when an attachment source cannot be resolved."""
