r"""Transports: the collaborators that put wire requests on the network.

A transport sends one ``WireRequest`` and returns an ``httpx.Response``
whose body is fully read, or raises. The executor treats it as an opaque
capability: it classifies whatever the transport raises and never
assumes anything about its internal concurrency. A single transport may
be shared by many executors.
"""

from __future__ import annotations

__all__ = ["BaseTransport", "CallableTransport", "HttpxTransport"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx

from arequest.types import CachePolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType
    from typing import Self

    from arequest.descriptor import WireRequest

logger: logging.Logger = logging.getLogger(__name__)


class BaseTransport(ABC):
    """Abstract base class for transports."""

    @abstractmethod
    async def send(self, wire: WireRequest) -> httpx.Response:
        """Send ``wire`` and return the response.

        Args:
            wire: The request to send.

        Returns:
            The response, with its body read.
        """

    async def aclose(self) -> None:
        """Release the resources held by the transport."""


class HttpxTransport(BaseTransport):
    """Transport backed by ``httpx.AsyncClient``.

    ``CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA`` adds a
    ``Cache-Control: no-cache`` header unless the request already sets
    ``Cache-Control``. The other cache policies send the request unchanged.

    Args:
        client: The client to send with. When ``None``, the transport
            creates its own client and closes it in ``aclose``. A client
            passed in is never closed by the transport.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arequest.descriptor import WireRequest
        >>> from arequest.transport import HttpxTransport
        >>> async def main():  # doctest: +SKIP
        ...     async with HttpxTransport() as transport:
        ...         return await transport.send(WireRequest("GET", "https://api.example.com/items"))
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(owns_client={self._owns_client})"

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, wire: WireRequest) -> httpx.Response:
        headers = dict(wire.headers)
        if (
            wire.cache_policy == CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA
            and wire.header("Cache-Control") is None
        ):
            headers["Cache-Control"] = "no-cache"
        logger.debug(f"Sending {wire.method} request to {wire.url}")
        return await self._client.request(
            wire.method,
            wire.url,
            headers=headers,
            content=wire.body,
            timeout=wire.timeout,
        )


class CallableTransport(BaseTransport):
    """Adapt a coroutine function ``func(wire) -> httpx.Response`` to a
    transport.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from arequest.descriptor import WireRequest
        >>> from arequest.transport import CallableTransport
        >>> async def fake_send(wire):
        ...     return httpx.Response(200, content=b"[]")
        ...
        >>> transport = CallableTransport(fake_send)
        >>> asyncio.run(transport.send(WireRequest("GET", "https://api.test/items"))).status_code
        200

        ```
    """

    def __init__(self, func: Callable[[WireRequest], Awaitable[httpx.Response]]) -> None:
        self.func = func

    async def send(self, wire: WireRequest) -> httpx.Response:
        return await self.func(wire)
