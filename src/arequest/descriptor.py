r"""Immutable request descriptors and the wire requests derived from them.

A ``RequestDescriptor`` declares one logical HTTP call: where it goes,
with which method, headers, query items, body, timeout, and cache
directive. It is turned into a ``WireRequest`` by
``arequest.normalizer.build_request``.

Descriptors can be built three ways, all producing the same value:

- directly, ``RequestDescriptor(domain=..., path=..., method="POST")``
- declaratively, by subclassing with new field defaults
- fluently, with the ``with_*`` methods, each returning a new descriptor

Example:
    ```pycon
    >>> from dataclasses import dataclass
    >>> from arequest.descriptor import RequestDescriptor
    >>> @dataclass(frozen=True)
    ... class ListItems(RequestDescriptor):
    ...     domain: str | None = "https://api.test"
    ...     path: str = "/items"
    ...
    >>> request = ListItems().with_query("page", "2").with_bearer_token("abc")
    >>> request.path, dict(request.query_items)
    ('/items', {'page': '2'})
    >>> request.headers["Authorization"]
    'Bearer abc'

    ```
"""

from __future__ import annotations

__all__ = ["RequestDescriptor", "WireRequest"]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from arequest.core.config import DEFAULT_TIMEOUT
from arequest.core.validation import validate_timeout
from arequest.encoding import encode_form, encode_json, encode_text
from arequest.types import CachePolicy, HttpMethod
from arequest.utils.headers import Authentication, basic_auth, bearer_auth, merge_headers

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Self

CONTENT_TYPE = "Content-Type"


@dataclass(frozen=True)
class RequestDescriptor:
    """Declarative, immutable description of one HTTP request.

    Args:
        domain: Base origin (scheme and host). ``None`` falls back to the
            client configuration's ``base_url``.
        path: Appended verbatim to ``domain``.
        method: HTTP method, as a ``HttpMethod`` or a method name.
        headers: Endpoint headers. They take precedence over configuration
            default headers.
        query_items: Query parameters appended to the URL.
        body: Raw body bytes, or ``None`` for no body.
        timeout: Seconds to wait for one send. ``None`` falls back to the
            configuration timeout.
        cache_policy: Cache directive for the transport. ``None`` falls
            back to the configuration cache policy.

    Raises:
        InvalidEndpointError: If ``method`` is not a supported method.
        ValueError: If ``timeout`` is not positive.
    """

    domain: str | None = None
    path: str = ""
    method: HttpMethod = HttpMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    query_items: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    cache_policy: CachePolicy | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "query_items", MappingProxyType(dict(self.query_items)))
        if self.body is not None:
            object.__setattr__(self, "body", bytes(self.body))
        if self.timeout is not None:
            validate_timeout(self.timeout)
        if self.cache_policy is not None:
            object.__setattr__(self, "cache_policy", CachePolicy(self.cache_policy))

    def with_path(self, path: str) -> Self:
        return replace(self, path=path)

    def with_method(self, method: HttpMethod | str) -> Self:
        return replace(self, method=method)

    def with_header(self, key: str, value: str) -> Self:
        return replace(self, headers=merge_headers(self.headers, {key: value}))

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        return replace(self, headers=merge_headers(self.headers, headers))

    def with_query(self, key: str, value: str) -> Self:
        return replace(self, query_items={**self.query_items, key: value})

    def with_query_items(self, items: Mapping[str, str]) -> Self:
        return replace(self, query_items={**self.query_items, **items})

    def with_body(self, body: bytes | None, content_type: str | None = None) -> Self:
        """Return a copy with raw body bytes and an optional content
        type."""
        headers = self.headers
        if content_type is not None:
            headers = merge_headers(headers, {CONTENT_TYPE: content_type})
        return replace(self, body=body, headers=headers)

    def with_json(self, value: Any) -> Self:
        """Return a copy with ``value`` encoded as a JSON body.

        Raises:
            EncodingError: If ``value`` cannot be encoded.
        """
        return self.with_body(encode_json(value), "application/json")

    def with_form(self, fields: Mapping[str, str]) -> Self:
        return self.with_body(encode_form(fields), "application/x-www-form-urlencoded")

    def with_text(self, text: str, content_type: str = "text/plain; charset=utf-8") -> Self:
        return self.with_body(encode_text(text), content_type)

    def with_timeout(self, timeout: float) -> Self:
        return replace(self, timeout=timeout)

    def with_cache_policy(self, cache_policy: CachePolicy) -> Self:
        return replace(self, cache_policy=cache_policy)

    def with_bearer_token(self, token: str) -> Self:
        return self.with_header(*bearer_auth(token))

    def with_basic_auth(self, username: str, password: str) -> Self:
        return self.with_header(*basic_auth(username, password))

    def with_api_key(self, header: str, value: str) -> Self:
        return self.with_header(header, value)

    def with_authentication(self, authentication: Authentication) -> Self:
        header = authentication.to_header()
        if header is None:
            return self
        return self.with_header(*header)


@dataclass(frozen=True)
class WireRequest:
    """Fully resolved request, ready to hand to a transport.

    Instances are produced by ``arequest.normalizer.build_request``.

    Attributes:
        method: The method token, e.g. ``"GET"``.
        url: Absolute URL including the encoded query string.
        headers: Merged header map.
        body: Body bytes, or ``None``.
        timeout: Seconds to wait for the send step.
        cache_policy: Cache directive for the transport.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float = DEFAULT_TIMEOUT
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY

    def header(self, key: str) -> str | None:
        """Return a header value, looking the key up case-insensitively."""
        lowered = key.lower()
        for name, value in self.headers.items():
            if name.lower() == lowered:
                return value
        return None
