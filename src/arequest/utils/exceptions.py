r"""Classification of exceptions raised at the transport boundary.

The transport is an opaque collaborator that may raise anything. This
module maps what it raises onto the classified error taxonomy so retry
policies only ever see ``RequestError`` subclasses.
"""

from __future__ import annotations

__all__ = ["classify_transport_error"]

import logging
from typing import TYPE_CHECKING

import httpx

from arequest.exceptions import NetworkError, RequestError, RequestTimeoutError

if TYPE_CHECKING:
    from arequest.descriptor import WireRequest

logger: logging.Logger = logging.getLogger(__name__)


def classify_transport_error(exc: Exception, wire: WireRequest) -> RequestError:
    """Classify an exception raised while sending ``wire``.

    Args:
        exc: The exception raised by the transport or by the send timeout.
        wire: The request being sent, used for error context.

    Returns:
        - ``exc`` unchanged if it is already a ``RequestError``
        - ``RequestTimeoutError`` for ``TimeoutError`` (which includes
          ``asyncio.TimeoutError``) and ``httpx.TimeoutException``
        - ``NetworkError`` for everything else, e.g. ``httpx.ConnectError``
          or ``OSError``

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.descriptor import WireRequest
        >>> from arequest.utils.exceptions import classify_transport_error
        >>> wire = WireRequest(method="GET", url="https://api.test/items")
        >>> error = classify_transport_error(httpx.ConnectError("refused"), wire)
        >>> type(error).__name__, error.url
        ('NetworkError', 'https://api.test/items')
        >>> type(classify_transport_error(TimeoutError(), wire)).__name__
        'RequestTimeoutError'

        ```
    """
    if isinstance(exc, RequestError):
        return exc
    error_type = type(exc).__name__
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        logger.debug(f"{wire.method} request to {wire.url} timed out ({error_type})")
        return RequestTimeoutError(
            f"{wire.method} request to {wire.url} timed out after {wire.timeout}s",
            cause=exc,
            url=wire.url,
            method=wire.method,
        )
    logger.debug(f"{wire.method} request to {wire.url} encountered {error_type}: {exc}")
    return NetworkError(
        f"{wire.method} request to {wire.url} failed: {error_type}: {exc}",
        cause=exc,
        url=wire.url,
        method=wire.method,
    )
