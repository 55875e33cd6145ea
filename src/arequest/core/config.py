r"""Configuration dataclass and defaults shared by executors and clients.

This module provides the default constants of the request pipeline and
``ClientConfig``, the immutable configuration profile carrying the base
URL, default headers, default timeout, cache policy, and optional default
retry policy and response validator.
"""

from __future__ import annotations

__all__ = [
    "BODYLESS_STATUS_CODES",
    "DEFAULT_ACCEPTABLE_STATUS_CODES",
    "DEFAULT_BASE_DELAY",
    "DEFAULT_JITTER_RANGE",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MULTIPLIER",
    "DEFAULT_PROFILE_TIMEOUT",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from arequest.core.validation import validate_timeout
from arequest.types import CachePolicy
from arequest.utils.headers import bearer_auth, merge_headers

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arequest.retry.policy import BaseRetryPolicy
    from arequest.validators import BaseResponseValidator


# Default seconds to wait for one send when neither the descriptor nor the
# configuration sets a timeout
DEFAULT_TIMEOUT = 60.0

# Timeout used by the standard and api profiles
DEFAULT_PROFILE_TIMEOUT = 30.0

# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Exponential backoff defaults: 1s, 2s, 4s, ... capped at 30s
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0
DEFAULT_MULTIPLIER = 2.0

# Jitter adds up to 10% of the exponential delay
DEFAULT_JITTER_RANGE = (0.0, 0.1)

DEFAULT_ACCEPTABLE_STATUS_CODES = range(200, 300)

# 204 No Content, 205 Reset Content, 304 Not Modified
BODYLESS_STATUS_CODES = frozenset({204, 205, 304})

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@dataclass(frozen=True)
class ClientConfig:
    """Configuration profile applied to every request of an executor or
    client.

    Args:
        base_url: Origin used when a descriptor has no ``domain``.
        default_headers: Headers sent with every request. Descriptor
            headers win on (case-insensitive) key collisions.
        timeout: Seconds to wait for one send when the descriptor sets no
            timeout. Must be > 0.
        cache_policy: Cache directive used when the descriptor sets none.
        retry_policy: Policy used when ``execute`` is not given one.
            ``None`` selects the default exponential policy.
        validator: Response validator used when none is passed explicitly.
            ``None`` selects ``DefaultResponseValidator()``.

    Example:
        ```pycon
        >>> from arequest.core.config import ClientConfig
        >>> config = ClientConfig.api("https://api.test", api_key="k")
        >>> config.default_headers["X-API-Key"]
        'k'
        >>> config.timeout
        30.0
        >>> config.merge(timeout=5.0).timeout
        5.0
        >>> config.timeout  # Original unchanged
        30.0

        ```
    """

    base_url: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    retry_policy: BaseRetryPolicy | None = None
    validator: BaseResponseValidator | None = None

    def __post_init__(self) -> None:
        """Validate and freeze configuration values.

        Raises:
            ValueError: If timeout is not positive or the cache policy is
                unknown.
        """
        validate_timeout(self.timeout)
        object.__setattr__(self, "default_headers", MappingProxyType(dict(self.default_headers)))
        object.__setattr__(self, "cache_policy", CachePolicy(self.cache_policy))

    @classmethod
    def standard(cls, base_url: str, **kwargs: Any) -> ClientConfig:
        """Return a profile sending and accepting JSON."""
        kwargs.setdefault("timeout", DEFAULT_PROFILE_TIMEOUT)
        return cls(base_url=base_url, default_headers=dict(JSON_HEADERS), **kwargs)

    @classmethod
    def api(
        cls,
        base_url: str,
        api_key: str | None = None,
        bearer_token: str | None = None,
        **kwargs: Any,
    ) -> ClientConfig:
        """Return a JSON profile with optional API key and bearer token
        headers."""
        headers = dict(JSON_HEADERS)
        if api_key is not None:
            headers["X-API-Key"] = api_key
        if bearer_token is not None:
            headers.update([bearer_auth(bearer_token)])
        kwargs.setdefault("timeout", DEFAULT_PROFILE_TIMEOUT)
        return cls(base_url=base_url, default_headers=headers, **kwargs)

    @classmethod
    def debug(cls, base_url: str, **kwargs: Any) -> ClientConfig:
        """Return a JSON profile with a debug user agent and a long
        timeout."""
        headers = {**JSON_HEADERS, "User-Agent": "arequest-debug/1.0"}
        kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        return cls(base_url=base_url, default_headers=headers, **kwargs)

    def with_headers(self, headers: Mapping[str, str]) -> ClientConfig:
        """Return a copy with ``headers`` layered over the default
        headers."""
        return replace(self, default_headers=merge_headers(self.default_headers, headers))

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-``None`` override values are applied.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new ``ClientConfig`` instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
