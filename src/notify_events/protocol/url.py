"""HTTP(S) URL validity predicate.

Used for action callback URLs at build time and for classifying textual
attachment sources at send time.  A valid URL:

- has an explicit ``http`` or ``https`` scheme
- has no embedded credentials (``user:pass@host``)
- has a host that is an IP literal or a dotted domain with a real TLD
  (underscores are tolerated in labels)
- has a valid port, if one is given
"""

from __future__ import annotations

import ipaddress
import re
import urllib.parse

_ALLOWED_SCHEMES = frozenset({"http", "https"})

_MAX_URL_LEN = 2083

# Labels may contain underscores; hyphens are not allowed at either end.
_LABEL_RE = re.compile(r"^(?!-)[\w-]{1,63}(?<!-)$")
_TLD_RE = re.compile(r"^(?:[a-z\u00a1-\uffff]{2,}|xn--[a-z0-9-]{2,})$", re.IGNORECASE)


def _is_valid_hostname(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass

    labels = hostname.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not _TLD_RE.match(labels[-1]):
        return False
    return all(_LABEL_RE.match(label) for label in labels)


def is_valid_http_url(text: object) -> bool:
    """Return ``True`` if *text* is an absolute http/https URL without credentials."""
    if not isinstance(text, str) or not text or len(text) > _MAX_URL_LEN:
        return False
    if any(ch.isspace() for ch in text):
        return False

    try:
        parsed = urllib.parse.urlsplit(text)
        port = parsed.port
    except ValueError:
        return False

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        return False
    if not parsed.netloc or "@" in parsed.netloc:
        return False
    if port is not None and port == 0:
        return False

    hostname = parsed.hostname
    if not hostname:
        return False
    return _is_valid_hostname(hostname)
