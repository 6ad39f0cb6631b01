"""Notify.Events protocol layer -- message types, validation, form layout.

Public API re-exports for ``notify_events.protocol``.  Nothing in this
package performs I/O.
"""

from notify_events.protocol.types import (
    DEFAULT_BASE_URL,
    DEFAULT_CALLBACK_METHOD,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILENAME,
    EXECUTE_PATH_TEMPLATE,
    Level,
    Priority,
    execute_url,
    parse_level,
    parse_priority,
)

from notify_events.protocol.errors import (
    NotifyEventsError,
    InvalidArgumentError,
    InvalidAttachmentError,
)

from notify_events.protocol.url import is_valid_http_url

from notify_events.protocol.action import Action

from notify_events.protocol.form import (
    FILES_FIELD,
    IMAGES_FIELD,
    action_fields,
    build_form,
)

__all__ = [
    # Types
    "DEFAULT_BASE_URL",
    "DEFAULT_CALLBACK_METHOD",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_FILENAME",
    "EXECUTE_PATH_TEMPLATE",
    "Level",
    "Priority",
    "execute_url",
    "parse_level",
    "parse_priority",
    # Errors
    "NotifyEventsError",
    "InvalidArgumentError",
    "InvalidAttachmentError",
    # URL
    "is_valid_http_url",
    # Action
    "Action",
    # Form
    "FILES_FIELD",
    "IMAGES_FIELD",
    "action_fields",
    "build_form",
]
