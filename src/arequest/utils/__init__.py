r"""Utility functions for building requests and handling their failures.

This package provides header helpers, Retry-After header parsing,
transport exception classification, and structured logging support.
"""

from __future__ import annotations

__all__ = [
    "Authentication",
    "basic_auth",
    "bearer_auth",
    "classify_transport_error",
    "media_type",
    "merge_headers",
    "parse_retry_after",
    "redact_headers",
    "retry_after_from_error",
]

from arequest.utils.exceptions import classify_transport_error
from arequest.utils.headers import (
    Authentication,
    basic_auth,
    bearer_auth,
    media_type,
    merge_headers,
    redact_headers,
)
from arequest.utils.retry_after import parse_retry_after, retry_after_from_error
