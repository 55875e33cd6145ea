r"""arequest - Declarative asynchronous HTTP requests with validation,
typed decoding, and pluggable retry policies.

This package lets callers describe an HTTP request as an immutable value,
turns that description into a wire request, sends it over httpx,
validates the response, decodes the body into a typed value with
pydantic, and retries failed attempts according to a retry policy.

Key Features:
    - Immutable request descriptors, built directly, by subclassing, or fluently
    - Configuration profiles with base URL, default headers, and timeouts
    - Response validation by status code, content type, and body presence
    - Typed decoding into pydantic models, dataclasses, or plain annotations
    - Classified errors that tell build, transport, protocol, and decode
      failures apart
    - Retry policies: none, linear, exponential, jittered, custom, and
      Retry-After aware
    - Request loggers for observability, with structured JSON logging support
    - Cooperative cancellation of in-flight sends and backoff sleeps

Example:
    ```pycon
    >>> from arequest import AsyncRequestClient, ClientConfig, RequestDescriptor
    >>> from arequest.retry import exponential
    >>> descriptor = RequestDescriptor(path="/items").with_query("page", "2")
    >>> async def main():  # doctest: +SKIP
    ...     async with AsyncRequestClient(ClientConfig.api("https://api.example.com")) as client:
    ...         return await client.execute(descriptor, list[dict], policy=exponential(max_retries=5))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRequestClient",
    "CachePolicy",
    "ClientConfig",
    "HttpMethod",
    "RequestDescriptor",
    "RequestError",
    "RequestExecutor",
    "WireRequest",
    "__version__",
    "build_request",
]

from importlib.metadata import PackageNotFoundError, version

from arequest.client import AsyncRequestClient
from arequest.core.config import ClientConfig
from arequest.descriptor import RequestDescriptor, WireRequest
from arequest.exceptions import RequestError
from arequest.executor import RequestExecutor
from arequest.normalizer import build_request
from arequest.types import CachePolicy, HttpMethod

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
