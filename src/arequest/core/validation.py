r"""Parameter validation utilities for request and retry configuration.

This module provides validation functions that check configuration
values before they are used to build requests or compute retry delays.
"""

from __future__ import annotations

__all__ = ["validate_jitter_range", "validate_retry_params", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for a response to one send.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from arequest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_jitter_range(jitter_range: tuple[float, float]) -> None:
    """Validate a ``(low, high)`` jitter range.

    Args:
        jitter_range: Bounds of the random jitter factor. Both bounds must
            be >= 0 and ``low`` must not exceed ``high``.

    Raises:
        ValueError: If the range is negative or inverted.
    """
    low, high = jitter_range
    if low < 0 or high < 0:
        msg = f"jitter_range bounds must be >= 0, got {jitter_range}"
        raise ValueError(msg)
    if low > high:
        msg = f"jitter_range lower bound must not exceed upper bound, got {jitter_range}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    base_delay: float = 0.0,
    max_delay: float | None = None,
    multiplier: float = 1.0,
) -> None:
    """Validate retry policy parameters.

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
            A value of 0 means only the initial attempt is made.
        base_delay: Base delay in seconds. Must be >= 0.
        max_delay: Optional delay cap in seconds. Must be > 0 if provided.
        multiplier: Growth factor between consecutive delays. Must be >= 1.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from arequest.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=3, base_delay=1.0, max_delay=30.0)
        >>> validate_retry_params(max_retries=-1)  # doctest: +SKIP

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if base_delay < 0:
        msg = f"base_delay must be >= 0, got {base_delay}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ValueError(msg)
    if multiplier < 1:
        msg = f"multiplier must be >= 1, got {multiplier}"
        raise ValueError(msg)
