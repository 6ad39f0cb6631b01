"""Client configuration via dataclass (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from notify_events.protocol.types import DEFAULT_BASE_URL
from notify_events.protocol.url import is_valid_http_url

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_FETCH_TIMEOUT = 10.0
_DEFAULT_MAX_REDIRECTS = 5


@dataclass
class ClientConfig:
    """Configuration for a Notify.Events client.

    All fields have sensible defaults.  ``base_url`` can be overridden via
    the ``NOTIFY_EVENTS_BASE_URL`` environment variable or the constructor.

    Priority (highest wins): constructor arg > env var > default.

    ``fetch_timeout`` and ``max_redirects`` bound the download of
    URL-sourced attachments; ``timeout`` applies to the final submission.
    """

    base_url: str | None = None
    timeout: float = _DEFAULT_TIMEOUT
    fetch_timeout: float = _DEFAULT_FETCH_TIMEOUT
    max_redirects: int = _DEFAULT_MAX_REDIRECTS
    user_agent: str | None = None

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("NOTIFY_EVENTS_BASE_URL", DEFAULT_BASE_URL)

        if not is_valid_http_url(self.base_url):
            raise ValueError(f"Invalid base_url {self.base_url!r}: must be an http(s) URL")
        self.base_url = self.base_url.rstrip("/")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")
        if self.fetch_timeout <= 0:
            raise ValueError(f"fetch_timeout must be positive, got {self.fetch_timeout!r}")
        if self.max_redirects < 0:
            raise ValueError(f"max_redirects must be >= 0, got {self.max_redirects!r}")

        if self.user_agent is None:
            from notify_events import __version__

            self.user_agent = f"notify-events-python/{__version__}"

        logger.debug("Client config: base_url=%s timeout=%s", self.base_url, self.timeout)
