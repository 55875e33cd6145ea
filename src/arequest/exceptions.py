r"""Classified errors raised while building, sending, validating, or
decoding a request.

Every failure of a request attempt is reported as a subclass of
``RequestError``. The class identifies why the attempt failed, and the
attributes carry enough context (status code, raw body, underlying cause)
for callers and retry policies to act on it.

The errors fall into four groups:
    - build-time: ``BuildError`` and its subclasses, never retried
    - transport-time: ``NetworkError``, ``RequestTimeoutError``,
      ``NoResponseError``
    - protocol-time: ``InvalidStatusCodeError``, ``InvalidContentTypeError``,
      ``NoDataError``
    - decode-time: ``DecodingError`` and ``InvalidJSONError``, never retried

Cancellation is reported separately through ``RequestCancelledError``,
which derives from ``asyncio.CancelledError`` so task cancellation keeps
propagating normally.
"""

from __future__ import annotations

__all__ = [
    "BadURLError",
    "BuildError",
    "DecodingError",
    "EncodingError",
    "InvalidContentTypeError",
    "InvalidEndpointError",
    "InvalidJSONError",
    "InvalidStatusCodeError",
    "NetworkError",
    "NoDataError",
    "NoResponseError",
    "RequestCancelledError",
    "RequestError",
    "RequestTimeoutError",
]

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx


class RequestError(Exception):
    """Base class of all classified request errors.

    Args:
        message: Human-readable error message.
        url: The URL of the failed request, if it was built.
        method: The HTTP method of the failed request, if known.

    Example:
        ```pycon
        >>> from arequest.exceptions import RequestError
        >>> error = RequestError("boom", url="https://api.test/items", method="GET")
        >>> error.url
        'https://api.test/items'
        >>> str(error)
        'boom'

        ```
    """

    def __init__(self, message: str, *, url: str | None = None, method: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.method = method


class BuildError(RequestError):
    """Raised when a descriptor cannot be turned into a wire request."""


class InvalidEndpointError(BuildError):
    """Raised when a descriptor has no usable domain or method."""


class BadURLError(BuildError):
    """Raised when domain and path do not form a valid http(s) URL.

    Args:
        raw_url: The string that failed to parse.
    """

    def __init__(self, raw_url: str, *, method: str | None = None, reason: str = "") -> None:
        message = f"malformed URL {raw_url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, url=raw_url, method=method)
        self.raw_url = raw_url


class EncodingError(RequestError):
    """Raised when a request body cannot be encoded.

    Args:
        cause: The exception raised by the encoder.
    """

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class NoResponseError(RequestError):
    """Raised when the transport completed without a response object."""


class InvalidStatusCodeError(RequestError):
    """Raised when the response status code is not acceptable.

    The raw body and headers are kept on the error so callers can inspect
    structured API error payloads.

    Args:
        status_code: The HTTP status code of the response.
        body: The raw response body.
        headers: The response headers.
        response: The response object, if available.

    Example:
        ```pycon
        >>> from arequest.exceptions import InvalidStatusCodeError
        >>> error = InvalidStatusCodeError(404, body=b'{"detail": "missing"}')
        >>> error.status_code
        404
        >>> error.body
        b'{"detail": "missing"}'

        ```
    """

    def __init__(
        self,
        status_code: int,
        *,
        body: bytes = b"",
        headers: Mapping[str, str] | None = None,
        response: httpx.Response | None = None,
        url: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(f"invalid status code: {status_code}", url=url, method=method)
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers) if headers is not None else {}
        self.response = response


class NoDataError(RequestError):
    """Raised when a response that should carry content has an empty
    body.

    Args:
        status_code: The HTTP status code of the response.
    """

    def __init__(
        self, status_code: int, *, url: str | None = None, method: str | None = None
    ) -> None:
        super().__init__(
            f"no data returned with status code {status_code}", url=url, method=method
        )
        self.status_code = status_code


class InvalidContentTypeError(RequestError):
    """Raised when the response media type is not in the allow-list.

    Args:
        content_type: The raw ``Content-Type`` header value.
    """

    def __init__(
        self, content_type: str, *, url: str | None = None, method: str | None = None
    ) -> None:
        super().__init__(f"invalid content type: {content_type}", url=url, method=method)
        self.content_type = content_type


class DecodingError(RequestError):
    """Raised when a response body cannot be decoded into the requested
    type.

    Args:
        cause: The exception raised by the decoder.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        url: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message, url=url, method=method)
        self.cause = cause


class InvalidJSONError(DecodingError):
    """Raised when a response body is not structurally valid JSON."""


class NetworkError(RequestError):
    """Raised when the transport fails (DNS, connection, TLS, protocol).

    Args:
        cause: The exception raised by the transport.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        url: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message, url=url, method=method)
        self.cause = cause


class RequestTimeoutError(NetworkError):
    """Raised when the send step exceeds the request timeout."""


class RequestCancelledError(asyncio.CancelledError):
    """Raised when the task executing a request is cancelled.

    This is a terminal outcome distinct from any policy decision. It
    derives from ``asyncio.CancelledError`` rather than ``RequestError``
    so that cancellation is never caught as an ordinary failure.

    Args:
        url: The URL of the cancelled request, if it was built.
        method: The HTTP method of the cancelled request.
        attempt: The attempt (0-indexed) during which cancellation happened.
    """

    def __init__(
        self, *, url: str | None = None, method: str | None = None, attempt: int = 0
    ) -> None:
        super().__init__(f"{method} request to {url} cancelled during attempt {attempt + 1}")
        self.url = url
        self.method = method
        self.attempt = attempt
