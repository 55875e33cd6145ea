r"""Retry policies.

A retry policy answers two questions about a failed attempt: should it be
retried, and how long to wait first. Policies are immutable and carry no
per-request state; the executor tracks the attempt index and passes it in.
"""

from __future__ import annotations

__all__ = [
    "BaseRetryPolicy",
    "CustomRetryPolicy",
    "DefaultRetryPolicy",
    "ExponentialRetryPolicy",
    "JitteredRetryPolicy",
    "LinearRetryPolicy",
    "NoRetryPolicy",
    "RetryAfterPolicy",
]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from arequest.backoff import ConstantBackoff, ExponentialBackoff, JitteredExponentialBackoff
from arequest.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_JITTER_RANGE,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MULTIPLIER,
)
from arequest.core.validation import validate_retry_params
from arequest.retry.decider import RetryDecider
from arequest.utils.retry_after import retry_after_from_error

if TYPE_CHECKING:
    import random
    from collections.abc import Callable

    from arequest.backoff import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


class BaseRetryPolicy(ABC):
    """Abstract base class for retry policies.

    Attributes:
        max_retries: Maximum number of retries after the initial attempt.
            A request is sent at most ``max_retries + 1`` times.
    """

    max_retries: int

    @abstractmethod
    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Return whether the failure of ``attempt`` should be retried.

        Args:
            error: The error of the failed attempt.
            attempt: The index (0-indexed) of the failed attempt.
        """

    @abstractmethod
    def delay(self, attempt: int, error: BaseException | None = None) -> float:
        """Return the seconds to wait after the failure of ``attempt``.

        Args:
            attempt: The index (0-indexed) of the failed attempt.
            error: The error of the failed attempt, for policies that derive
                the delay from the response (e.g. ``Retry-After``).
        """


class NoRetryPolicy(BaseRetryPolicy):
    """Never retry.

    Example:
        ```pycon
        >>> from arequest.exceptions import NetworkError
        >>> from arequest.retry import NoRetryPolicy
        >>> policy = NoRetryPolicy()
        >>> policy.max_retries, policy.should_retry(NetworkError("down"), 0), policy.delay(0)
        (0, False, 0.0)

        ```
    """

    max_retries = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def should_retry(self, error: BaseException, attempt: int) -> bool:  # noqa: ARG002
        return False

    def delay(self, attempt: int, error: BaseException | None = None) -> float:  # noqa: ARG002
        return 0.0


class _BackoffRetryPolicy(BaseRetryPolicy):
    """Retry policy combining the shared retry decision rules with a
    backoff strategy."""

    def __init__(self, max_retries: int, backoff: BaseBackoffStrategy) -> None:
        validate_retry_params(max_retries=max_retries)
        self.max_retries = max_retries
        self.backoff = backoff
        self._decider = RetryDecider(max_retries)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self.max_retries}, backoff={self.backoff!r})"

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        return self._decider.should_retry(error, attempt)

    def delay(self, attempt: int, error: BaseException | None = None) -> float:  # noqa: ARG002
        return self.backoff.calculate(attempt)


class LinearRetryPolicy(_BackoffRetryPolicy):
    """Retry with the same delay before every attempt.

    Args:
        max_retries: Maximum number of retries (default: 3).
        delay: Fixed delay in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from arequest.retry import LinearRetryPolicy
        >>> policy = LinearRetryPolicy(max_retries=2, delay=0.5)
        >>> [policy.delay(attempt) for attempt in range(3)]
        [0.5, 0.5, 0.5]

        ```
    """

    def __init__(self, max_retries: int = DEFAULT_MAX_RETRIES, delay: float = 1.0) -> None:
        super().__init__(max_retries, ConstantBackoff(delay))


class ExponentialRetryPolicy(_BackoffRetryPolicy):
    """Retry with exponentially growing, capped delays.

    ``delay(attempt) = min(base_delay * multiplier ** attempt, max_delay)``

    Args:
        max_retries: Maximum number of retries (default: 3).
        base_delay: Delay before the first retry in seconds (default: 1.0).
        max_delay: Delay cap in seconds (default: 30.0).
        multiplier: Growth factor (default: 2.0).

    Example:
        ```pycon
        >>> from arequest.retry import ExponentialRetryPolicy
        >>> policy = ExponentialRetryPolicy()
        >>> [policy.delay(attempt) for attempt in range(6)]
        [1.0, 2.0, 4.0, 8.0, 16.0, 30.0]

        ```
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
    ) -> None:
        validate_retry_params(
            max_retries, base_delay=base_delay, max_delay=max_delay, multiplier=multiplier
        )
        super().__init__(
            max_retries,
            ExponentialBackoff(base_delay=base_delay, multiplier=multiplier, max_delay=max_delay),
        )


DefaultRetryPolicy = ExponentialRetryPolicy


class JitteredRetryPolicy(_BackoffRetryPolicy):
    """Retry with exponential delays plus random jitter, capped after the
    jitter is added.

    Args:
        max_retries: Maximum number of retries (default: 3).
        base_delay: Delay before the first retry in seconds (default: 1.0).
        max_delay: Delay cap in seconds (default: 30.0).
        multiplier: Growth factor (default: 2.0).
        jitter_range: Bounds of the jitter factor (default: ``(0.0, 0.1)``).
        rng: Optional ``random.Random`` for reproducible delays.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        jitter_range: tuple[float, float] = DEFAULT_JITTER_RANGE,
        rng: random.Random | None = None,
    ) -> None:
        validate_retry_params(
            max_retries, base_delay=base_delay, max_delay=max_delay, multiplier=multiplier
        )
        super().__init__(
            max_retries,
            JitteredExponentialBackoff(
                base_delay=base_delay,
                multiplier=multiplier,
                max_delay=max_delay,
                jitter_range=jitter_range,
                rng=rng,
            ),
        )


class CustomRetryPolicy(BaseRetryPolicy):
    """Retry policy built from user functions.

    The attempt ceiling is still enforced: ``retry_if`` is only consulted
    while ``attempt < max_retries``. ``retry_if`` receives any exception,
    so rules are not limited to the built-in error classes.

    Args:
        max_retries: Maximum number of retries.
        delay_func: ``delay_func(attempt) -> seconds``.
        retry_if: ``retry_if(error, attempt) -> bool``.

    Example:
        ```pycon
        >>> from arequest.exceptions import NoDataError
        >>> from arequest.retry import CustomRetryPolicy
        >>> policy = CustomRetryPolicy(
        ...     max_retries=2,
        ...     delay_func=lambda attempt: 0.1 * (attempt + 1),
        ...     retry_if=lambda error, attempt: isinstance(error, NoDataError),
        ... )
        >>> policy.should_retry(NoDataError(200), 0), policy.should_retry(NoDataError(200), 2)
        (True, False)

        ```
    """

    def __init__(
        self,
        max_retries: int,
        delay_func: Callable[[int], float],
        retry_if: Callable[[BaseException, int], bool],
    ) -> None:
        validate_retry_params(max_retries=max_retries)
        self.max_retries = max_retries
        self.delay_func = delay_func
        self.retry_if = retry_if

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self.max_retries})"

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        if attempt >= self.max_retries:
            return False
        return self.retry_if(error, attempt)

    def delay(self, attempt: int, error: BaseException | None = None) -> float:  # noqa: ARG002
        return self.delay_func(attempt)


class RetryAfterPolicy(BaseRetryPolicy):
    """Wrap a policy so that a server ``Retry-After`` header overrides
    its delay.

    Retry decisions are delegated unchanged. When the error of the failed
    attempt is a status code error whose response carries a parseable
    ``Retry-After`` header, that value is used as the delay, capped at
    ``max_wait`` if set. Otherwise the wrapped policy's delay is used.

    Args:
        policy: The wrapped policy.
        max_wait: Optional cap in seconds on ``Retry-After`` delays.

    Example:
        ```pycon
        >>> from arequest.exceptions import InvalidStatusCodeError
        >>> from arequest.retry import LinearRetryPolicy, RetryAfterPolicy
        >>> policy = RetryAfterPolicy(LinearRetryPolicy(delay=1.0), max_wait=60.0)
        >>> policy.delay(0, InvalidStatusCodeError(503, headers={"Retry-After": "5"}))
        5.0
        >>> policy.delay(0, InvalidStatusCodeError(503))
        1.0

        ```
    """

    def __init__(self, policy: BaseRetryPolicy, max_wait: float | None = None) -> None:
        if max_wait is not None and max_wait <= 0:
            msg = f"max_wait must be > 0, got {max_wait}"
            raise ValueError(msg)
        self.policy = policy
        self.max_wait = max_wait

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r}, max_wait={self.max_wait})"

    @property
    def max_retries(self) -> int:  # type: ignore[override]
        return self.policy.max_retries

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        return self.policy.should_retry(error, attempt)

    def delay(self, attempt: int, error: BaseException | None = None) -> float:
        retry_after = retry_after_from_error(error)
        if retry_after is None:
            return self.policy.delay(attempt, error)
        if self.max_wait is not None and retry_after > self.max_wait:
            logger.debug(f"Capping Retry-After {retry_after:.2f}s to {self.max_wait:.2f}s")
            retry_after = self.max_wait
        logger.debug(f"Using Retry-After header value: {retry_after:.2f}s")
        return retry_after
