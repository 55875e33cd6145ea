r"""Core configuration and parameter validation shared by executors and
clients.

This package holds the default constants of the request pipeline, the
``ClientConfig`` profile, and the validation helpers used by every
component that accepts timeouts or retry parameters.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_PROFILE_TIMEOUT",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "validate_jitter_range",
    "validate_retry_params",
    "validate_timeout",
]

from arequest.core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_PROFILE_TIMEOUT,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from arequest.core.validation import (
    validate_jitter_range,
    validate_retry_params,
    validate_timeout,
)
