r"""Unit tests for RequestDescriptor and WireRequest."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass

import pytest

from arequest.descriptor import RequestDescriptor, WireRequest
from arequest.exceptions import EncodingError, InvalidEndpointError
from arequest.types import CachePolicy, HttpMethod
from arequest.utils.headers import Authentication


@dataclass(frozen=True)
class ListItems(RequestDescriptor):
    domain: str | None = "https://api.test"
    path: str = "/items"


#######################################
#     Tests for RequestDescriptor     #
#######################################


def test_descriptor_defaults() -> None:
    descriptor = RequestDescriptor()
    assert descriptor.domain is None
    assert descriptor.path == ""
    assert descriptor.method is HttpMethod.GET
    assert dict(descriptor.headers) == {}
    assert dict(descriptor.query_items) == {}
    assert descriptor.body is None
    assert descriptor.timeout is None
    assert descriptor.cache_policy is None


def test_descriptor_is_frozen() -> None:
    descriptor = RequestDescriptor()
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.path = "/x"  # type: ignore[misc]


def test_descriptor_method_from_string() -> None:
    assert RequestDescriptor(method="post").method is HttpMethod.POST


def test_descriptor_invalid_method() -> None:
    with pytest.raises(InvalidEndpointError):
        RequestDescriptor(method="FETCH")


@pytest.mark.parametrize("timeout", [0, -5.0])
def test_descriptor_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        RequestDescriptor(timeout=timeout)


def test_descriptor_copies_mappings() -> None:
    headers = {"X-A": "1"}
    descriptor = RequestDescriptor(headers=headers)
    headers["X-A"] = "2"
    assert descriptor.headers["X-A"] == "1"
    with pytest.raises(TypeError):
        descriptor.headers["X-B"] = "3"  # type: ignore[index]


def test_descriptor_body_bytearray_converted() -> None:
    assert RequestDescriptor(body=bytearray(b"abc")).body == b"abc"


def test_descriptor_declarative_subclass() -> None:
    descriptor = ListItems()
    assert descriptor.domain == "https://api.test"
    assert descriptor.path == "/items"
    assert descriptor.method is HttpMethod.GET


def test_descriptor_three_styles_are_equal() -> None:
    direct = RequestDescriptor(
        domain="https://api.test", path="/items", query_items={"page": "2"}
    )
    fluent = RequestDescriptor(domain="https://api.test").with_path("/items").with_query("page", "2")
    declarative = ListItems().with_query("page", "2")
    assert direct == fluent
    assert (declarative.domain, declarative.path, declarative.query_items) == (
        direct.domain,
        direct.path,
        direct.query_items,
    )


def test_descriptor_fluent_methods_do_not_modify_original() -> None:
    original = ListItems()
    updated = original.with_header("X-A", "1").with_method("DELETE").with_timeout(5.0)
    assert dict(original.headers) == {}
    assert original.method is HttpMethod.GET
    assert original.timeout is None
    assert updated.headers["X-A"] == "1"
    assert updated.method is HttpMethod.DELETE
    assert updated.timeout == 5.0
    assert isinstance(updated, ListItems)


def test_descriptor_with_headers_case_insensitive() -> None:
    descriptor = RequestDescriptor(headers={"Accept": "text/plain"}).with_headers(
        {"accept": "application/json"}
    )
    assert dict(descriptor.headers) == {"accept": "application/json"}


def test_descriptor_with_query_items() -> None:
    descriptor = RequestDescriptor(query_items={"a": "1"}).with_query_items({"b": "2", "a": "3"})
    assert dict(descriptor.query_items) == {"a": "3", "b": "2"}


def test_descriptor_with_json() -> None:
    descriptor = RequestDescriptor(method="POST").with_json({"id": 1})
    assert json.loads(descriptor.body) == {"id": 1}
    assert descriptor.headers["Content-Type"] == "application/json"


def test_descriptor_with_json_unencodable() -> None:
    with pytest.raises(EncodingError):
        RequestDescriptor().with_json(object())


def test_descriptor_with_form() -> None:
    descriptor = RequestDescriptor().with_form({"q": "a b"})
    assert descriptor.body == b"q=a+b"
    assert descriptor.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_descriptor_with_text() -> None:
    descriptor = RequestDescriptor().with_text("hi")
    assert descriptor.body == b"hi"
    assert descriptor.headers["Content-Type"] == "text/plain; charset=utf-8"


def test_descriptor_with_body_without_content_type() -> None:
    descriptor = RequestDescriptor().with_body(b"\x00\x01")
    assert descriptor.body == b"\x00\x01"
    assert "Content-Type" not in descriptor.headers


def test_descriptor_with_cache_policy() -> None:
    descriptor = RequestDescriptor().with_cache_policy(
        CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA
    )
    assert descriptor.cache_policy is CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA


def test_descriptor_auth_helpers() -> None:
    assert RequestDescriptor().with_bearer_token("t").headers["Authorization"] == "Bearer t"
    assert RequestDescriptor().with_basic_auth("u", "p").headers["Authorization"].startswith(
        "Basic "
    )
    assert RequestDescriptor().with_api_key("X-Key", "k").headers["X-Key"] == "k"


def test_descriptor_with_authentication() -> None:
    descriptor = RequestDescriptor().with_authentication(Authentication.bearer("t"))
    assert descriptor.headers["Authorization"] == "Bearer t"


def test_descriptor_with_authentication_none() -> None:
    descriptor = RequestDescriptor()
    assert descriptor.with_authentication(Authentication.none()) is descriptor


#################################
#     Tests for WireRequest     #
#################################


def test_wire_request_defaults() -> None:
    wire = WireRequest(method="GET", url="https://api.test")
    assert dict(wire.headers) == {}
    assert wire.body is None
    assert wire.timeout == 60.0
    assert wire.cache_policy is CachePolicy.USE_PROTOCOL_CACHE_POLICY


def test_wire_request_header_lookup_case_insensitive() -> None:
    wire = WireRequest(method="GET", url="https://api.test", headers={"Content-Type": "a"})
    assert wire.header("content-type") == "a"
    assert wire.header("Accept") is None
