r"""Asynchronous context manager client for executing requests.

This module provides ``AsyncRequestClient``, which pairs a configuration
profile with a transport and offers convenient per-method shortcuts. When
no transport is given, the client creates an ``httpx.AsyncClient`` on
entering its context and closes it on exit.
"""

from __future__ import annotations

__all__ = ["AsyncRequestClient"]

import logging
from typing import TYPE_CHECKING, Any

from arequest.core.config import DEFAULT_ACCEPTABLE_STATUS_CODES, ClientConfig
from arequest.descriptor import RequestDescriptor
from arequest.executor import RequestExecutor
from arequest.transport import HttpxTransport
from arequest.types import HttpMethod
from arequest.validators import StatusCodeValidator

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from arequest.callbacks import BaseRequestLogger
    from arequest.decoding import BaseDecoder
    from arequest.retry import BaseRetryPolicy
    from arequest.transport import BaseTransport
    from arequest.validators import BaseResponseValidator

logger: logging.Logger = logging.getLogger(__name__)

# HEAD responses carry no body, so only the status code is checked.
_HEAD_VALIDATOR = StatusCodeValidator(DEFAULT_ACCEPTABLE_STATUS_CODES)


class AsyncRequestClient:
    r"""Asynchronous context manager for executing requests with a shared
    configuration.

    Args:
        config: Configuration profile for every request. If ``None``, a
            default ``ClientConfig`` is used.
        transport: Transport to send requests with. If ``None``, an
            ``httpx.AsyncClient`` backed transport is created on entering
            the context and closed on exit. A transport passed in is never
            closed by the client.
        logger: Request logger notified of lifecycle events.
        decoder: Decoder for response bodies.

    Example:
        ```pycon
        >>> import asyncio
        >>> from pydantic import BaseModel
        >>> from arequest import AsyncRequestClient, ClientConfig
        >>> class Item(BaseModel):
        ...     id: int
        ...
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRequestClient(ClientConfig.api("https://api.example.com")) as client:
        ...         items = await client.get("/items", list[Item], params={"page": "1"})
        ...         created = await client.post("/items", Item, json={"id": 2})
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: BaseTransport | None = None,
        logger: BaseRequestLogger | None = None,
        decoder: BaseDecoder | None = None,
    ) -> None:
        self._config = config if config is not None else ClientConfig()
        self._transport = transport
        self._owns_transport = transport is None
        self._request_logger = logger
        self._decoder = decoder
        self._executor: RequestExecutor | None = None
        self._entered = False

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config!r})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the transport if
        needed.

        Returns:
            The AsyncRequestClient instance for making requests.
        """
        if self._owns_transport:
            self._transport = HttpxTransport()
        self._executor = RequestExecutor(
            self._transport,
            config=self._config,
            decoder=self._decoder,
            logger=self._request_logger,
        )
        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the transport it
        created.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._owns_transport and self._transport is not None:
            await self._transport.aclose()
            self._transport = None
        self._executor = None
        self._entered = False

    def _ensure_executor(self) -> RequestExecutor:
        """Ensure the client is available for use.

        Returns:
            The executor bound to the client's transport.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if not self._entered or self._executor is None:
            msg = "AsyncRequestClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._executor

    async def execute(
        self,
        descriptor: RequestDescriptor,
        target: Any = None,
        *,
        policy: BaseRetryPolicy | None = None,
        validator: BaseResponseValidator | None = None,
    ) -> Any:
        r"""Execute a request descriptor and decode the response body.

        See ``RequestExecutor.execute``.

        Raises:
            RuntimeError: If called outside of a context manager.
        """
        executor = self._ensure_executor()
        return await executor.execute(descriptor, target, policy=policy, validator=validator)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        target: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
        timeout: float | None = None,
        policy: BaseRetryPolicy | None = None,
        validator: BaseResponseValidator | None = None,
    ) -> Any:
        r"""Send a request to ``path`` under the configured base URL.

        Args:
            method: HTTP method.
            path: Path appended to ``config.base_url``.
            target: The type to decode the body into. ``None`` returns the
                raw body bytes.
            headers: Request headers, layered over the default headers.
            params: Query parameters.
            body: Raw body bytes. Mutually exclusive with ``json``.
            json: Value serialized as the JSON body.
            timeout: Override of the configured timeout.
            policy: Override of the retry policy.
            validator: Override of the response validator.

        Returns:
            The decoded body.

        Raises:
            RuntimeError: If called outside of a context manager.
            ValueError: If both ``body`` and ``json`` are given.
            RequestError: If the request fails (see
                ``RequestExecutor.execute``).
        """
        if body is not None and json is not None:
            msg = "body and json are mutually exclusive"
            raise ValueError(msg)
        descriptor = RequestDescriptor(
            path=path,
            method=HttpMethod.parse(method),
            headers=headers or {},
            query_items=params or {},
            body=body,
            timeout=timeout,
        )
        if json is not None:
            descriptor = descriptor.with_json(json)
        return await self.execute(descriptor, target, policy=policy, validator=validator)

    async def get(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send a GET request (see ``request``)."""
        return await self.request(HttpMethod.GET, path, target, **kwargs)

    async def post(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send a POST request (see ``request``)."""
        return await self.request(HttpMethod.POST, path, target, **kwargs)

    async def put(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send a PUT request (see ``request``)."""
        return await self.request(HttpMethod.PUT, path, target, **kwargs)

    async def patch(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send a PATCH request (see ``request``)."""
        return await self.request(HttpMethod.PATCH, path, target, **kwargs)

    async def delete(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send a DELETE request (see ``request``)."""
        return await self.request(HttpMethod.DELETE, path, target, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> Any:
        r"""Send a HEAD request (see ``request``).

        HEAD responses have no body, so the default validator is replaced
        by a status-only check unless ``validator`` is given.
        """
        kwargs.setdefault("validator", _HEAD_VALIDATOR)
        return await self.request(HttpMethod.HEAD, path, None, **kwargs)

    async def options(self, path: str, target: Any = None, **kwargs: Any) -> Any:
        r"""Send an OPTIONS request (see ``request``)."""
        return await self.request(HttpMethod.OPTIONS, path, target, **kwargs)
