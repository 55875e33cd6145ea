r"""Shared test helpers for executor, client, and validator tests.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = [
    "TEST_DOMAIN",
    "TEST_URL",
    "ScriptedTransport",
    "create_response",
]

from typing import TYPE_CHECKING, Any

import httpx

from arequest.transport import BaseTransport

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from arequest.descriptor import WireRequest

TEST_DOMAIN = "https://api.test"
TEST_URL = f"{TEST_DOMAIN}/items"


def create_response(
    status_code: int = 200,
    content: bytes = b"",
    headers: Mapping[str, str] | None = None,
    method: str = "GET",
    url: str = TEST_URL,
) -> httpx.Response:
    """Create a real ``httpx.Response`` with its request attached.

    Args:
        status_code: The response status code.
        content: The response body.
        headers: The response headers.
        method: The method of the attached request.
        url: The URL of the attached request.

    Returns:
        The response, with its body already read.
    """
    return httpx.Response(
        status_code,
        content=content,
        headers=headers,
        request=httpx.Request(method, url),
    )


class ScriptedTransport(BaseTransport):
    """Transport replaying a script of outcomes and recording every
    request it is asked to send.

    Each outcome is either an ``httpx.Response`` (returned), an exception
    instance (raised), or ``None`` (returned as is). The last outcome is
    repeated once the script is exhausted.

    Args:
        outcomes: The outcomes, in send order.
    """

    def __init__(self, outcomes: Iterable[Any]) -> None:
        self.outcomes = list(outcomes)
        self.sent: list[WireRequest] = []
        self.closed = False

    async def send(self, wire: WireRequest) -> httpx.Response:
        index = min(len(self.sent), len(self.outcomes) - 1)
        self.sent.append(wire)
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True
