r"""Enumerations shared by descriptors, wire requests, and transports."""

from __future__ import annotations

__all__ = ["CachePolicy", "HttpMethod"]

from enum import Enum

from arequest.exceptions import InvalidEndpointError


class HttpMethod(str, Enum):
    """HTTP methods supported by request descriptors.

    Example:
        ```pycon
        >>> from arequest.types import HttpMethod
        >>> HttpMethod.parse("post")
        <HttpMethod.POST: 'POST'>
        >>> HttpMethod.GET.value
        'GET'

        ```
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: HttpMethod | str) -> HttpMethod:
        """Convert a method name to a ``HttpMethod``.

        Args:
            value: A ``HttpMethod`` member or a method name in any case.

        Returns:
            The matching ``HttpMethod`` member.

        Raises:
            InvalidEndpointError: If the value is not a supported method.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            msg = f"unsupported HTTP method: {value!r}"
            raise InvalidEndpointError(msg) from None


class CachePolicy(str, Enum):
    """Cache directive threaded through to the transport.

    The request pipeline does not interpret these values; transports decide
    what each one means for them.
    """

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_LOCAL_CACHE_DATA = "reload_ignoring_local_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"
