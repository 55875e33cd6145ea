r"""Turn request descriptors into wire requests.

``build_request`` is pure and deterministic: building the same descriptor
with the same configuration twice yields equal wire requests, and the
descriptor is never modified. All failures are raised before any network
activity.
"""

from __future__ import annotations

__all__ = ["build_request", "build_url"]

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

import httpx

from arequest.core.config import ClientConfig
from arequest.descriptor import WireRequest
from arequest.exceptions import BadURLError, InvalidEndpointError
from arequest.utils.headers import merge_headers

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arequest.descriptor import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def build_url(domain: str, path: str, query_items: Mapping[str, str], method: str = "GET") -> str:
    """Build the absolute URL of a request.

    ``domain`` and ``path`` are concatenated as-is. Non-empty
    ``query_items`` are percent-encoded and merged into the query string;
    an empty mapping leaves the URL without a ``?``.

    Args:
        domain: Scheme and host, e.g. ``"https://api.test"``.
        path: Path appended to ``domain``.
        query_items: Query parameters.
        method: The request method, used in error messages.

    Returns:
        The absolute URL as a string.

    Raises:
        BadURLError: If the result is not a valid http(s) URL with a host.

    Example:
        ```pycon
        >>> from arequest.normalizer import build_url
        >>> build_url("https://api.test", "/items", {})
        'https://api.test/items'
        >>> build_url("https://api.test", "/search", {"q": "a&b"})
        'https://api.test/search?q=a%26b'

        ```
    """
    raw_url = domain + path
    try:
        url = httpx.URL(raw_url)
    except httpx.InvalidURL as exc:
        raise BadURLError(raw_url, method=method, reason=str(exc)) from exc
    if url.scheme not in _ALLOWED_SCHEMES:
        raise BadURLError(raw_url, method=method, reason="scheme must be http or https")
    if not url.host:
        raise BadURLError(raw_url, method=method, reason="missing host")
    if query_items:
        url = url.copy_merge_params(dict(query_items))
    return str(url)


def build_request(
    descriptor: RequestDescriptor, config: ClientConfig | None = None
) -> WireRequest:
    """Build the wire request described by ``descriptor``.

    Configuration values fill in what the descriptor leaves unset: the
    ``base_url`` when the descriptor has no ``domain``, the timeout, and the
    cache policy. Configuration default headers are sent too, with
    descriptor headers taking precedence on key collisions.

    Args:
        descriptor: The request to build.
        config: Optional configuration profile. Defaults to
            ``ClientConfig()``.

    Returns:
        The wire request.

    Raises:
        InvalidEndpointError: If neither the descriptor nor the
            configuration provides a domain.
        BadURLError: If domain and path do not form a valid http(s) URL.

    Example:
        ```pycon
        >>> from arequest.core.config import ClientConfig
        >>> from arequest.descriptor import RequestDescriptor
        >>> from arequest.normalizer import build_request
        >>> config = ClientConfig.standard("https://api.test")
        >>> wire = build_request(RequestDescriptor(path="/items", query_items={"page": "2"}), config)
        >>> wire.method, wire.url
        ('GET', 'https://api.test/items?page=2')
        >>> wire.headers["Accept"]
        'application/json'

        ```
    """
    config = config if config is not None else ClientConfig()
    method = descriptor.method.value
    domain = descriptor.domain if descriptor.domain is not None else config.base_url
    if domain is None or not domain.strip():
        msg = f"{method} request to {descriptor.path!r} has no domain and no base_url is configured"
        raise InvalidEndpointError(msg, method=method)

    url = build_url(domain, descriptor.path, descriptor.query_items, method)
    headers = merge_headers(config.default_headers, descriptor.headers)
    wire = WireRequest(
        method=method,
        url=url,
        headers=MappingProxyType(headers),
        body=descriptor.body,
        timeout=descriptor.timeout if descriptor.timeout is not None else config.timeout,
        cache_policy=(
            descriptor.cache_policy
            if descriptor.cache_policy is not None
            else config.cache_policy
        ),
    )
    logger.debug(f"Built {wire.method} request to {wire.url}")
    return wire
