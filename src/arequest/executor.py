r"""Asynchronous request executor with automatic retry logic.

``RequestExecutor`` runs the full request pipeline for one descriptor:

1. build the wire request (once; build errors are never retried)
2. send it through the transport, bounded by the request timeout
3. validate the response
4. decode the body into the caller's target type

When a step fails, the classified error is handed to the retry policy.
If the policy allows another attempt, the executor sleeps for the
policy's delay and sends again; otherwise the last classified error is
raised to the caller. Attempts are strictly sequential.

Cancelling the task running ``execute`` aborts an in-flight send or a
pending backoff sleep. The executor then raises ``RequestCancelledError``
without consulting the policy and without sending again.
"""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from arequest.callbacks import (
    FailureInfo,
    NullRequestLogger,
    RequestInfo,
    ResponseInfo,
    RetryInfo,
    invoke_logger,
)
from arequest.core.config import ClientConfig
from arequest.decoding import JSONDecoder
from arequest.exceptions import NoResponseError, RequestCancelledError, RequestError
from arequest.normalizer import build_request
from arequest.retry import DefaultRetryPolicy
from arequest.utils.exceptions import classify_transport_error
from arequest.validators import DefaultResponseValidator

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from arequest.callbacks import BaseRequestLogger
    from arequest.decoding import BaseDecoder
    from arequest.descriptor import RequestDescriptor, WireRequest
    from arequest.retry import BaseRetryPolicy
    from arequest.transport import BaseTransport
    from arequest.validators import BaseResponseValidator

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    r"""Execute request descriptors with validation, decoding, and
    retries.

    The executor holds no per-request state, so one instance can serve
    many concurrent requests.

    Args:
        transport: The transport used to send requests.
        config: Configuration profile supplying the base URL, default
            headers, default timeout, and optional default retry policy and
            validator. Defaults to ``ClientConfig()``.
        validator: Validator used when ``execute`` is not given one. Takes
            precedence over ``config.validator``.
        decoder: Decoder for response bodies. Defaults to ``JSONDecoder()``.
        logger: Request logger notified of lifecycle events. Defaults to
            ``NullRequestLogger()``.
        sleep: Coroutine function used for backoff sleeps. Defaults to
            ``asyncio.sleep``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from arequest import RequestDescriptor, RequestExecutor
        >>> from arequest.transport import CallableTransport
        >>> async def fake_send(wire):
        ...     return httpx.Response(200, content=b'[{"id": 1}]')
        ...
        >>> executor = RequestExecutor(CallableTransport(fake_send))
        >>> descriptor = RequestDescriptor(domain="https://api.test", path="/items")
        >>> asyncio.run(executor.execute(descriptor, list[dict[str, int]]))
        [{'id': 1}]

        ```
    """

    def __init__(
        self,
        transport: BaseTransport,
        *,
        config: ClientConfig | None = None,
        validator: BaseResponseValidator | None = None,
        decoder: BaseDecoder | None = None,
        logger: BaseRequestLogger | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self.transport = transport
        self.config = config if config is not None else ClientConfig()
        self.validator = validator
        self.decoder = decoder if decoder is not None else JSONDecoder()
        self.request_logger = logger if logger is not None else NullRequestLogger()
        self._sleep = sleep if sleep is not None else asyncio.sleep

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(transport={self.transport!r}, "
            f"config={self.config!r}, decoder={self.decoder!r})"
        )

    def _resolve_policy(self, policy: BaseRetryPolicy | None) -> BaseRetryPolicy:
        if policy is not None:
            return policy
        if self.config.retry_policy is not None:
            return self.config.retry_policy
        return DefaultRetryPolicy()

    def _resolve_validator(self, validator: BaseResponseValidator | None) -> BaseResponseValidator:
        for candidate in (validator, self.validator, self.config.validator):
            if candidate is not None:
                return candidate
        return DefaultResponseValidator()

    async def execute(
        self,
        descriptor: RequestDescriptor,
        target: Any = None,
        *,
        policy: BaseRetryPolicy | None = None,
        validator: BaseResponseValidator | None = None,
    ) -> Any:
        r"""Execute ``descriptor`` and decode the response body.

        Args:
            descriptor: The request to execute.
            target: The type to decode the body into. ``None`` returns the
                raw body bytes.
            policy: Retry policy for this request. Falls back to
                ``config.retry_policy``, then to ``DefaultRetryPolicy()``.
            validator: Validator for this request. Falls back to the
                executor's validator, then ``config.validator``, then
                ``DefaultResponseValidator()``.

        Returns:
            The decoded body.

        Raises:
            BuildError: If the descriptor cannot be built. No request is
                sent.
            RequestError: The classified error of the last attempt, when
                the policy declines to retry or retries are exhausted.
            RequestCancelledError: If the task is cancelled during a send
                or a backoff sleep.
        """
        return await self._run(
            descriptor,
            policy=policy,
            validator=validator,
            finish=lambda response: self.decoder.decode(response.content, target),
        )

    async def execute_response(
        self,
        descriptor: RequestDescriptor,
        *,
        policy: BaseRetryPolicy | None = None,
        validator: BaseResponseValidator | None = None,
    ) -> httpx.Response:
        r"""Execute ``descriptor`` and return the validated response
        without decoding it.

        Retries, validation, and errors behave exactly as in ``execute``.
        """
        return await self._run(
            descriptor, policy=policy, validator=validator, finish=lambda response: response
        )

    async def _run(
        self,
        descriptor: RequestDescriptor,
        *,
        policy: BaseRetryPolicy | None,
        validator: BaseResponseValidator | None,
        finish: Callable[[httpx.Response], Any],
    ) -> Any:
        policy = self._resolve_policy(policy)
        validator = self._resolve_validator(validator)
        wire = self._build(descriptor)
        max_retries = max(policy.max_retries, 0)
        start_time = time.monotonic()

        for attempt in range(max_retries + 1):
            try:
                return await self._attempt(
                    wire,
                    attempt=attempt,
                    max_retries=max_retries,
                    validator=validator,
                    finish=finish,
                    start_time=start_time,
                )
            except RequestError as error:
                if attempt >= max_retries or not policy.should_retry(error, attempt):
                    logger.debug(
                        f"{wire.method} {wire.url} failed with {type(error).__name__} "
                        f"after {attempt + 1} attempt(s)"
                    )
                    invoke_logger(
                        self.request_logger,
                        "on_error",
                        FailureInfo(
                            error=error,
                            wire_request=wire,
                            duration=time.monotonic() - start_time,
                            attempt=attempt,
                        ),
                    )
                    raise
                wait_time = policy.delay(attempt, error)
                logger.debug(
                    f"{wire.method} {wire.url} failed with {type(error).__name__}, "
                    f"will retry in {wait_time:.2f}s"
                )
                invoke_logger(
                    self.request_logger,
                    "on_retry",
                    RetryInfo(
                        wire_request=wire,
                        attempt=attempt,
                        max_retries=max_retries,
                        wait_time=wait_time,
                        error=error,
                    ),
                )

            try:
                await self._sleep(wait_time)
            except asyncio.CancelledError as exc:
                raise self._cancelled(wire, attempt, start_time) from exc

        msg = f"{wire.method} {wire.url}: retry loop ended without a result"  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover

    def _build(self, descriptor: RequestDescriptor) -> WireRequest:
        try:
            return build_request(descriptor, self.config)
        except RequestError as error:
            logger.debug(f"Failed to build request: {error}")
            invoke_logger(
                self.request_logger,
                "on_error",
                FailureInfo(error=error, wire_request=None, duration=None, attempt=0),
            )
            raise

    async def _attempt(
        self,
        wire: WireRequest,
        *,
        attempt: int,
        max_retries: int,
        validator: BaseResponseValidator,
        finish: Callable[[httpx.Response], Any],
        start_time: float,
    ) -> Any:
        logger.debug(f"{wire.method} {wire.url} attempt {attempt + 1}/{max_retries + 1}")
        invoke_logger(
            self.request_logger,
            "on_request",
            RequestInfo(wire_request=wire, attempt=attempt, max_retries=max_retries),
        )

        send_start = time.monotonic()
        try:
            response = await asyncio.wait_for(self.transport.send(wire), timeout=wire.timeout)
        except asyncio.CancelledError as exc:
            raise self._cancelled(wire, attempt, start_time) from exc
        except Exception as exc:
            error = classify_transport_error(exc, wire)
            if error is exc:
                raise
            raise error from exc
        duration = time.monotonic() - send_start

        if response is None:
            msg = f"{wire.method} request to {wire.url} returned no response"
            raise NoResponseError(msg, url=wire.url, method=wire.method)

        invoke_logger(
            self.request_logger,
            "on_response",
            ResponseInfo(
                wire_request=wire,
                status_code=response.status_code,
                body=response.content,
                duration=duration,
                attempt=attempt,
            ),
        )
        validator.validate(response)
        result = finish(response)
        logger.debug(
            f"{wire.method} {wire.url} succeeded with status {response.status_code} "
            f"on attempt {attempt + 1}"
        )
        return result

    def _cancelled(
        self, wire: WireRequest, attempt: int, start_time: float
    ) -> RequestCancelledError:
        logger.debug(f"{wire.method} {wire.url} cancelled during attempt {attempt + 1}")
        error = RequestCancelledError(url=wire.url, method=wire.method, attempt=attempt)
        invoke_logger(
            self.request_logger,
            "on_error",
            FailureInfo(
                error=error,
                wire_request=wire,
                duration=time.monotonic() - start_time,
                attempt=attempt,
            ),
        )
        return error
