r"""Jittered exponential backoff strategy."""

from __future__ import annotations

__all__ = ["JitteredExponentialBackoff"]

import logging
import math
import random

from arequest.backoff.exponential import ExponentialBackoff
from arequest.core.config import DEFAULT_BASE_DELAY, DEFAULT_JITTER_RANGE, DEFAULT_MULTIPLIER
from arequest.core.validation import validate_jitter_range

logger: logging.Logger = logging.getLogger(__name__)


class JitteredExponentialBackoff(ExponentialBackoff):
    """Exponential backoff with random jitter.

    The delay is computed in three steps:

    1. ``exponential = base_delay * (multiplier ** attempt)``
    2. ``delay = exponential + random.uniform(*jitter_range) * exponential``
    3. ``delay = min(delay, max_delay)`` if ``max_delay`` is set

    The cap is applied after the jitter, so delays near the ceiling are
    clamped rather than pushed over it.

    Args:
        base_delay: The delay in seconds before the first retry (default: 1.0).
        multiplier: The growth factor between consecutive delays (default: 2.0).
        max_delay: Optional maximum delay cap in seconds.
        jitter_range: ``(low, high)`` bounds of the random jitter factor
            (default: ``(0.0, 0.1)``, up to 10% extra delay).
        rng: Optional ``random.Random`` instance, for reproducible delays.

    Example:
        ```pycon
        >>> import random
        >>> from arequest.backoff import JitteredExponentialBackoff
        >>> backoff = JitteredExponentialBackoff(base_delay=1.0, jitter_range=(0.5, 0.5))
        >>> backoff.calculate(1)
        3.0
        >>> backoff = JitteredExponentialBackoff(rng=random.Random(0))
        >>> 1.0 <= backoff.calculate(0) <= 1.1
        True

        ```
    """

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        max_delay: float | None = None,
        jitter_range: tuple[float, float] = DEFAULT_JITTER_RANGE,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(base_delay=base_delay, multiplier=multiplier, max_delay=max_delay)
        validate_jitter_range(jitter_range)
        self.jitter_range = (float(jitter_range[0]), float(jitter_range[1]))
        self._rng = rng if rng is not None else random.Random()  # noqa: S311

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay}, "
            f"jitter_range={self.jitter_range})"
        )

    def calculate(self, attempt: int) -> float:
        exponential = self.uncapped(attempt)
        jitter = self._rng.uniform(*self.jitter_range) * exponential if exponential < math.inf else 0.0
        delay = exponential + jitter
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        logger.debug(
            f"Jittered delay {delay:.2f}s (base={exponential:.2f}s, jitter={jitter:.2f}s)"
        )
        return delay
