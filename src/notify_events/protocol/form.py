"""Multipart form composition for the source execution endpoint.

Fields are produced as an ordered list of ``(name, (filename, payload,
content_type))`` tuples, the shape httpx accepts for ``files=``.  Scalar
fields use ``filename=None`` and ``content_type=None`` so they are
rendered as plain form fields, which keeps every field in one ordered
sequence:

1. ``title`` (only when non-empty), ``content``, ``priority``, ``level``
2. ``images[]`` entries, then ``files[]`` entries, in insertion order
3. ``actions[<i>][...]`` sub-fields, in insertion order
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import IO, Iterable, Sequence, Tuple, Union

from notify_events.protocol.action import Action
from notify_events.protocol.types import Level, Priority

logger = logging.getLogger(__name__)

FilePayload = Union[bytes, str, IO[bytes]]
FormPart = Tuple[str, Tuple[Union[str, None], FilePayload, Union[str, None]]]

IMAGES_FIELD = "images[]"
FILES_FIELD = "files[]"


def _field(name: str, value: object) -> FormPart:
    if value is None:
        value = ""
    elif isinstance(value, (Priority, Level)):
        value = value.value
    return (name, (None, str(value), None))


def action_fields(index: int, action: Action) -> list[FormPart]:
    """Return the indexed sub-fields for one action.

    Header names are percent-encoded (keeping URL-safe punctuation) so
    they cannot break out of the bracketed field name.
    """
    prefix = f"actions[{index}]"
    parts = [
        _field(f"{prefix}[name]", action.name),
        _field(f"{prefix}[title]", action.title),
        _field(f"{prefix}[callback_url]", action.callback_url),
        _field(f"{prefix}[callback_method]", action.callback_method),
        _field(f"{prefix}[callback_content]", action.callback_content),
    ]
    for header, value in action.callback_headers.items():
        encoded = urllib.parse.quote(header, safe="!#$&'()*+,-./:;=?@_~")
        parts.append(_field(f"{prefix}[callback_headers][{encoded}]", value))
    return parts


def attachment_part(field_name: str, attachment) -> FormPart:
    """Return a file part for a resolved attachment.

    *attachment* needs ``filename``, ``content_type`` and ``payload``.
    """
    return (field_name, (attachment.filename, attachment.payload, attachment.content_type))


def build_form(
    *,
    title: str | None,
    content: str,
    priority: Priority,
    level: Level,
    images: Iterable = (),
    files: Iterable = (),
    actions: Sequence[Action] = (),
) -> list[FormPart]:
    """Compose the complete ordered multipart field list for one message."""
    parts: list[FormPart] = []

    if title:
        parts.append(_field("title", title))
    parts.append(_field("content", content))
    parts.append(_field("priority", priority))
    parts.append(_field("level", level))

    parts.extend(attachment_part(IMAGES_FIELD, image) for image in images)
    parts.extend(attachment_part(FILES_FIELD, file) for file in files)

    for index, action in enumerate(actions):
        parts.extend(action_fields(index, action))

    logger.debug(
        "Composed form: %d fields, %d actions", len(parts), len(actions)
    )
    return parts
