r"""Unit tests for HttpMethod and CachePolicy."""

from __future__ import annotations

import pytest

from arequest.exceptions import InvalidEndpointError
from arequest.types import CachePolicy, HttpMethod


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("GET", HttpMethod.GET),
        ("post", HttpMethod.POST),
        ("Patch", HttpMethod.PATCH),
        (HttpMethod.DELETE, HttpMethod.DELETE),
        ("options", HttpMethod.OPTIONS),
        ("head", HttpMethod.HEAD),
        ("put", HttpMethod.PUT),
    ],
)
def test_http_method_parse(value: str, expected: HttpMethod) -> None:
    assert HttpMethod.parse(value) is expected


@pytest.mark.parametrize("value", ["FETCH", "", "TRACE"])
def test_http_method_parse_unsupported(value: str) -> None:
    with pytest.raises(InvalidEndpointError, match=r"unsupported HTTP method"):
        HttpMethod.parse(value)


def test_http_method_is_str() -> None:
    assert HttpMethod.GET == "GET"


def test_cache_policy_members() -> None:
    assert {policy.name for policy in CachePolicy} == {
        "USE_PROTOCOL_CACHE_POLICY",
        "RELOAD_IGNORING_LOCAL_CACHE_DATA",
        "RETURN_CACHE_DATA_ELSE_LOAD",
        "RETURN_CACHE_DATA_DONT_LOAD",
    }
