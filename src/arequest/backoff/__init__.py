r"""Backoff strategies for retry delays.

This package provides the delay functions used by retry policies:
constant, exponential with an optional cap, and jittered exponential.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "JitteredExponentialBackoff",
]

from arequest.backoff.base import BaseBackoffStrategy
from arequest.backoff.constant import ConstantBackoff
from arequest.backoff.exponential import ExponentialBackoff
from arequest.backoff.jittered import JitteredExponentialBackoff
