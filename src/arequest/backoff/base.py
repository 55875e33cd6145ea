r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy is a pure function of the attempt index giving the
    delay to wait before the next attempt. Strategies hold no per-request
    state and can be shared freely between concurrent requests.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The index (0-indexed) of the attempt that just failed.
                For example, attempt=0 gives the delay before the first
                retry.

        Returns:
            The delay in seconds before the next attempt.
        """
