r"""Request loggers: observers of the request lifecycle.

A request logger is injected into the executor and notified at four
points of every request:

- ``on_request``: before each send attempt
- ``on_response``: when a response arrives, before validation
- ``on_retry``: after a failed attempt, before the backoff sleep
- ``on_error``: when the request fails for good (including cancellation)

Request loggers only observe. ``invoke_logger`` shields the executor from
them: an exception raised by a logger is reported on this module's logger
and dropped, so a logger can never turn a success into a failure or the
reverse.

Example:
    ```pycon
    >>> from arequest.callbacks import CallbackRequestLogger, RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"Retry {info.attempt + 1}/{info.max_retries} in {info.wait_time}s")
    ...
    >>> request_logger = CallbackRequestLogger(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = [
    "BaseRequestLogger",
    "CallbackRequestLogger",
    "FailureInfo",
    "LoggingRequestLogger",
    "NullRequestLogger",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
    "invoke_logger",
]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from arequest.utils.headers import redact_headers
from arequest.utils.structured_logging import log_structured
from arequest.validators import is_successful

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.descriptor import WireRequest

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestInfo:
    """Information passed to ``on_request``.

    Attributes:
        wire_request: The request about to be sent.
        attempt: The attempt index (0-indexed). The first send is 0.
        max_retries: Maximum number of retries of the active policy.
    """

    wire_request: WireRequest
    attempt: int
    max_retries: int


@dataclass(frozen=True)
class ResponseInfo:
    """Information passed to ``on_response``.

    Attributes:
        wire_request: The request that was sent.
        status_code: The response status code.
        body: The raw response body.
        duration: Seconds spent in the send step.
        attempt: The attempt index (0-indexed).
    """

    wire_request: WireRequest
    status_code: int
    body: bytes
    duration: float
    attempt: int


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to ``on_retry``.

    Attributes:
        wire_request: The request that will be resent.
        attempt: The index (0-indexed) of the attempt that failed.
        max_retries: Maximum number of retries of the active policy.
        wait_time: Seconds the executor sleeps before the next attempt.
        error: The classified error of the failed attempt.
    """

    wire_request: WireRequest
    attempt: int
    max_retries: int
    wait_time: float
    error: BaseException


@dataclass(frozen=True)
class FailureInfo:
    """Information passed to ``on_error``.

    Attributes:
        error: The error returned to the caller.
        wire_request: The request, or ``None`` if building it failed.
        duration: Seconds since the request started, or ``None`` if it was
            never sent.
        attempt: The index (0-indexed) of the last attempt.
    """

    error: BaseException
    wire_request: WireRequest | None
    duration: float | None
    attempt: int


class BaseRequestLogger:
    """Base class of request loggers.

    Every hook does nothing by default, so subclasses only override the
    events they care about.
    """

    def on_request(self, info: RequestInfo) -> None:
        """Called before each send attempt."""

    def on_response(self, info: ResponseInfo) -> None:
        """Called when a response arrives, before validation."""

    def on_retry(self, info: RetryInfo) -> None:
        """Called after a failed attempt, before the backoff sleep."""

    def on_error(self, info: FailureInfo) -> None:
        """Called once when the request fails for good."""


class NullRequestLogger(BaseRequestLogger):
    """Request logger ignoring every event."""

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class LoggingRequestLogger(BaseRequestLogger):
    """Request logger emitting structured records through ``logging``.

    Requests are logged at INFO, successful responses at INFO and other
    responses at WARNING, retries at WARNING, and failures at ERROR.
    Request headers and the response body size are added at DEBUG.
    Records carry ``method``, ``url``, ``attempt`` and event specific
    fields through ``extra``, ready for ``StructuredFormatter``.

    Args:
        logger: The logger to emit on. Defaults to the ``arequest.requests``
            logger.
        enabled: Whether to emit anything at all.
    """

    def __init__(self, logger: logging.Logger | None = None, enabled: bool = True) -> None:
        self.logger = logger if logger is not None else logging.getLogger("arequest.requests")
        self.enabled = enabled

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(logger={self.logger.name!r}, enabled={self.enabled})"

    def on_request(self, info: RequestInfo) -> None:
        if not self.enabled:
            return
        wire = info.wire_request
        log_structured(
            self.logger,
            logging.INFO,
            f"{wire.method} {wire.url} attempt {info.attempt + 1}/{info.max_retries + 1}",
            method=wire.method,
            url=wire.url,
            attempt=info.attempt,
        )
        if self.logger.isEnabledFor(logging.DEBUG):
            log_structured(
                self.logger,
                logging.DEBUG,
                f"{wire.method} {wire.url} headers",
                method=wire.method,
                url=wire.url,
                headers=redact_headers(wire.headers),
                body_size=len(wire.body) if wire.body is not None else 0,
            )

    def on_response(self, info: ResponseInfo) -> None:
        if not self.enabled:
            return
        wire = info.wire_request
        level = logging.INFO if is_successful(info.status_code) else logging.WARNING
        log_structured(
            self.logger,
            level,
            f"{wire.method} {wire.url} -> {info.status_code} in {info.duration * 1000:.1f}ms",
            method=wire.method,
            url=wire.url,
            attempt=info.attempt,
            status_code=info.status_code,
            duration_ms=round(info.duration * 1000, 3),
        )
        log_structured(
            self.logger,
            logging.DEBUG,
            f"{wire.method} {wire.url} response body: {len(info.body)} bytes",
            method=wire.method,
            url=wire.url,
            body_size=len(info.body),
        )

    def on_retry(self, info: RetryInfo) -> None:
        if not self.enabled:
            return
        wire = info.wire_request
        log_structured(
            self.logger,
            logging.WARNING,
            f"{wire.method} {wire.url} failed with {type(info.error).__name__}, "
            f"retrying in {info.wait_time:.2f}s",
            method=wire.method,
            url=wire.url,
            attempt=info.attempt,
            max_retries=info.max_retries,
            wait_time=info.wait_time,
            error_type=type(info.error).__name__,
        )

    def on_error(self, info: FailureInfo) -> None:
        if not self.enabled:
            return
        wire = info.wire_request
        target = f"{wire.method} {wire.url}" if wire is not None else "request"
        log_structured(
            self.logger,
            logging.ERROR,
            f"{target} failed: {info.error}",
            method=wire.method if wire is not None else None,
            url=wire.url if wire is not None else None,
            attempt=info.attempt,
            error_type=type(info.error).__name__,
            duration_ms=round(info.duration * 1000, 3) if info.duration is not None else None,
        )


class CallbackRequestLogger(BaseRequestLogger):
    """Request logger forwarding events to plain callables.

    Args:
        on_request: Optional ``func(RequestInfo)``.
        on_response: Optional ``func(ResponseInfo)``.
        on_retry: Optional ``func(RetryInfo)``.
        on_error: Optional ``func(FailureInfo)``.
    """

    def __init__(
        self,
        on_request: Callable[[RequestInfo], None] | None = None,
        on_response: Callable[[ResponseInfo], None] | None = None,
        on_retry: Callable[[RetryInfo], None] | None = None,
        on_error: Callable[[FailureInfo], None] | None = None,
    ) -> None:
        self._on_request = on_request
        self._on_response = on_response
        self._on_retry = on_retry
        self._on_error = on_error

    def on_request(self, info: RequestInfo) -> None:
        if self._on_request is not None:
            self._on_request(info)

    def on_response(self, info: ResponseInfo) -> None:
        if self._on_response is not None:
            self._on_response(info)

    def on_retry(self, info: RetryInfo) -> None:
        if self._on_retry is not None:
            self._on_retry(info)

    def on_error(self, info: FailureInfo) -> None:
        if self._on_error is not None:
            self._on_error(info)


def invoke_logger(request_logger: BaseRequestLogger, event: str, info: Any) -> None:
    """Notify ``request_logger`` of ``event`` without letting it fail the
    request.

    Args:
        request_logger: The request logger to notify.
        event: The hook name, e.g. ``"on_request"``.
        info: The info object passed to the hook.

    Example:
        ```pycon
        >>> from arequest.callbacks import CallbackRequestLogger, invoke_logger
        >>> def broken(info):
        ...     raise RuntimeError("boom")
        ...
        >>> invoke_logger(CallbackRequestLogger(on_error=broken), "on_error", None)

        ```
    """
    try:
        getattr(request_logger, event)(info)
    except Exception:
        logger.warning(f"Request logger {request_logger!r} raised in {event}", exc_info=True)
