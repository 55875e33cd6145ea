r"""Retry decision logic shared by the built-in retry policies.

This module classifies errors as retryable or not, independently of the
attempt count. Policies combine these predicates with their attempt
ceiling.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "is_retryable_error", "is_transient_error"]

import logging

from arequest.exceptions import (
    BuildError,
    DecodingError,
    EncodingError,
    InvalidStatusCodeError,
    NetworkError,
    NoResponseError,
    RequestError,
)
from arequest.validators import is_client_error, is_server_error

logger: logging.Logger = logging.getLogger(__name__)


def is_retryable_error(error: BaseException) -> bool:
    """Return whether the built-in policies may retry ``error``.

    Never retried:
        - client error status codes (400-499): the request itself is wrong
        - decoding errors, including invalid JSON: the response will not
          change on resend
        - build and encoding errors: they recur identically
        - anything that is not a ``RequestError``

    Every other classified error is retried, in particular network errors,
    timeouts, and server error status codes (500-599).

    Example:
        ```pycon
        >>> from arequest.exceptions import InvalidStatusCodeError, NetworkError
        >>> from arequest.retry.decider import is_retryable_error
        >>> is_retryable_error(InvalidStatusCodeError(503))
        True
        >>> is_retryable_error(InvalidStatusCodeError(404))
        False
        >>> is_retryable_error(NetworkError("connection reset"))
        True

        ```
    """
    if not isinstance(error, RequestError):
        return False
    if isinstance(error, InvalidStatusCodeError):
        return not is_client_error(error.status_code)
    return not isinstance(error, (DecodingError, BuildError, EncodingError))


def is_transient_error(error: BaseException) -> bool:
    """Return whether ``error`` is a transient connectivity or server
    failure.

    Stricter than ``is_retryable_error``: only network errors, timeouts,
    missing responses, and server error status codes (500-599) qualify.
    Intended for ``CustomRetryPolicy(retry_if=...)``.

    Example:
        ```pycon
        >>> from arequest.exceptions import InvalidStatusCodeError, NoDataError
        >>> from arequest.retry.decider import is_transient_error
        >>> is_transient_error(InvalidStatusCodeError(502))
        True
        >>> is_transient_error(NoDataError(200))
        False

        ```
    """
    if isinstance(error, InvalidStatusCodeError):
        return is_server_error(error.status_code)
    return isinstance(error, (NetworkError, NoResponseError))


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        max_retries: Maximum number of retries. Attempts with index
            ``>= max_retries`` are never retried.
    """

    def __init__(self, max_retries: int) -> None:
        self.max_retries = max_retries

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self.max_retries})"

    def has_retries_left(self, attempt: int) -> bool:
        return attempt < self.max_retries

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Determine if the failure of ``attempt`` should trigger a retry.

        Args:
            error: The classified error of the failed attempt.
            attempt: The index (0-indexed) of the failed attempt.

        Returns:
            ``True`` if another attempt should be made.
        """
        if not self.has_retries_left(attempt):
            logger.debug(f"Not retrying {type(error).__name__}: max retries exhausted")
            return False
        if not is_retryable_error(error):
            logger.debug(f"Not retrying non-retryable {type(error).__name__}")
            return False
        return True
