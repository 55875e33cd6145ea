r"""Retry policies and the decision rules they share.

Public API:
    - BaseRetryPolicy: Interface consulted by the executor after a failure
    - NoRetryPolicy, LinearRetryPolicy, ExponentialRetryPolicy,
      JitteredRetryPolicy, CustomRetryPolicy: Built-in policies
    - RetryAfterPolicy: Wrapper honouring server ``Retry-After`` headers
    - RetryDecider: Attempt ceiling plus retryable error classification
    - no_retry, linear, exponential, jittered, custom: Policy factories
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
    "RetryDecider",
    "custom",
    "exponential",
    "is_retryable_error",
    "is_transient_error",
    "jittered",
    "linear",
    "no_retry",
]

from typing import TYPE_CHECKING

from arequest.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_JITTER_RANGE,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MULTIPLIER,
)
from arequest.retry.decider import RetryDecider, is_retryable_error, is_transient_error
from arequest.retry.policy import (
    BaseRetryPolicy,
    CustomRetryPolicy,
    DefaultRetryPolicy,
    ExponentialRetryPolicy,
    JitteredRetryPolicy,
    LinearRetryPolicy,
    NoRetryPolicy,
    RetryAfterPolicy,
)

if TYPE_CHECKING:
    import random
    from collections.abc import Callable


def no_retry() -> NoRetryPolicy:
    r"""Return a policy that never retries."""
    return NoRetryPolicy()


def linear(max_retries: int = DEFAULT_MAX_RETRIES, delay: float = 1.0) -> LinearRetryPolicy:
    r"""Return a policy waiting ``delay`` seconds before every retry."""
    return LinearRetryPolicy(max_retries=max_retries, delay=delay)


def exponential(
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    multiplier: float = DEFAULT_MULTIPLIER,
) -> ExponentialRetryPolicy:
    r"""Return an exponential backoff policy.

    Example:
        ```pycon
        >>> from arequest.retry import exponential
        >>> policy = exponential(max_retries=5, base_delay=0.5, max_delay=4.0)
        >>> [policy.delay(attempt) for attempt in range(5)]
        [0.5, 1.0, 2.0, 4.0, 4.0]

        ```
    """
    return ExponentialRetryPolicy(
        max_retries=max_retries,
        base_delay=base_delay,
        max_delay=max_delay,
        multiplier=multiplier,
    )


def jittered(
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    multiplier: float = DEFAULT_MULTIPLIER,
    jitter_range: tuple[float, float] = DEFAULT_JITTER_RANGE,
    rng: random.Random | None = None,
) -> JitteredRetryPolicy:
    r"""Return an exponential backoff policy with random jitter."""
    return JitteredRetryPolicy(
        max_retries=max_retries,
        base_delay=base_delay,
        max_delay=max_delay,
        multiplier=multiplier,
        jitter_range=jitter_range,
        rng=rng,
    )


def custom(
    max_retries: int,
    delay_func: Callable[[int], float],
    retry_if: Callable[[BaseException, int], bool],
) -> CustomRetryPolicy:
    r"""Return a policy built from user functions.

    Args:
        max_retries: Maximum number of retries.
        delay_func: ``delay_func(attempt) -> seconds``.
        retry_if: ``retry_if(error, attempt) -> bool``. Only consulted while
            retries are left.
    """
    return CustomRetryPolicy(max_retries=max_retries, delay_func=delay_func, retry_if=retry_if)
