"""Core types and constants for the Notify.Events message format."""

from __future__ import annotations

from enum import Enum

from notify_events.protocol.errors import InvalidArgumentError

DEFAULT_BASE_URL = "https://notify.events"

# Path of the source execution endpoint, relative to the base URL
EXECUTE_PATH_TEMPLATE = "/api/v1/channel/source/{token}/execute"

DEFAULT_FILENAME = "file.dat"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_CALLBACK_METHOD = "get"


class Priority(str, Enum):
    """Message priority.

    Using ``str, Enum`` so that ``Priority.HIGH == "high"`` is True.
    """

    LOWEST = "lowest"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    HIGHEST = "highest"


class Level(str, Enum):
    """Message level (severity / category)."""

    VERBOSE = "verbose"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


def parse_priority(value: Priority | str) -> Priority:
    """Return the :class:`Priority` member for *value*.

    Raises:
        InvalidArgumentError: If *value* is not one of the five priorities.
    """
    try:
        return Priority(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid priority value: {value!r}") from None


def parse_level(value: Level | str) -> Level:
    """Return the :class:`Level` member for *value*.

    Raises:
        InvalidArgumentError: If *value* is not one of the six levels.
    """
    try:
        return Level(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid level value: {value!r}") from None


def execute_url(base_url: str, token: str) -> str:
    """Build the execution endpoint URL for a source *token*."""
    return base_url.rstrip("/") + EXECUTE_PATH_TEMPLATE.format(token=token)
