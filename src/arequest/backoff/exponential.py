r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from arequest.backoff.base import BaseBackoffStrategy
from arequest.core.config import DEFAULT_BASE_DELAY, DEFAULT_MULTIPLIER


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (multiplier ** attempt), with optional max_delay cap.

    Args:
        base_delay: The delay in seconds before the first retry (default: 1.0).
        multiplier: The growth factor between consecutive delays (default: 2.0).
            Must be >= 1.
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from arequest.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=1.0, max_delay=30.0)
        >>> [backoff.calculate(attempt) for attempt in range(6)]
        [1.0, 2.0, 4.0, 8.0, 16.0, 30.0]

        ```
    """

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        max_delay: float | None = None,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay})"
        )

    def uncapped(self, attempt: int) -> float:
        """Return base_delay * (multiplier ** attempt) without the cap."""
        try:
            return self.base_delay * (self.multiplier**attempt)
        except OverflowError:
            return float("inf")

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            The calculated delay: base_delay * (multiplier ** attempt),
            capped at max_delay if set.
        """
        delay = self.uncapped(attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
