r"""Structured logging utilities for machine-readable request logs.

The request loggers in ``arequest.callbacks`` attach fields such as
``method``, ``url``, ``status_code`` and ``duration`` to their log records.
Attaching a ``StructuredFormatter`` to a handler renders those records as
one JSON object per line, with the current correlation id when one is set.

Example:
    ```python
    import logging

    from arequest.utils.structured_logging import StructuredFormatter, set_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("arequest")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    set_correlation_id("checkout-42")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "arequest_correlation_id", default=None
)

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Return the correlation id of the current context, if any.

    Example:
        ```pycon
        >>> from arequest.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-123")
        >>> get_correlation_id()
        'req-123'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current thread or task context."""
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Remove the correlation id from the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON objects.

    Each object contains ``timestamp`` (ISO 8601, UTC), ``level``,
    ``logger``, ``message``, the ``correlation_id`` when set, ``exception``
    when the record carries exception info, and every field passed through
    ``extra``. Values that are not JSON serializable are rendered with
    ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from arequest.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("arequest", logging.INFO, "", 0, "sent", None, None)
        >>> record.status_code = 200
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["status_code"]
        ('sent', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log ``message`` with ``extra`` structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.INFO``).
        message: Log message.
        **extra: Fields attached to the log record.
    """
    logger.log(level, message, extra=extra)
