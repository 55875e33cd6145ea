r"""Retry-After header parsing utilities.

This module provides functions for parsing the Retry-After header value
from HTTP responses according to RFC 7231.
"""

from __future__ import annotations

__all__ = ["parse_retry_after", "retry_after_from_error"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from arequest.exceptions import InvalidStatusCodeError

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse the Retry-After header value from an HTTP response.

    The header is either a number of seconds (``"120"``) or an HTTP-date
    (``"Wed, 21 Oct 2015 07:28:00 GMT"``). Dates in the past give ``0.0``.

    Args:
        retry_after_header: The raw header value, or ``None`` when absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is absent
        or cannot be parsed.

    Example:
        ```pycon
        >>> from arequest.utils.retry_after import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None:
        return None

    with suppress(ValueError):
        seconds = float(retry_after_header)
        if not math.isfinite(seconds):
            logger.debug(f"Ignoring non-finite Retry-After header: {retry_after_header!r}")
            return None
        return max(0.0, seconds)

    try:
        retry_date: datetime = parsedate_to_datetime(retry_after_header)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    delta_seconds = (retry_date - datetime.now(timezone.utc)).total_seconds()
    return max(0.0, delta_seconds)


def retry_after_from_error(error: BaseException | None) -> float | None:
    """Return the Retry-After delay carried by a status code error.

    Args:
        error: The classified error of the failed attempt.

    Returns:
        The parsed delay, or ``None`` when the error has no response
        headers or no parseable Retry-After header.
    """
    if not isinstance(error, InvalidStatusCodeError):
        return None
    for key, value in error.headers.items():
        if key.lower() == "retry-after":
            return parse_retry_after(value)
    return None
