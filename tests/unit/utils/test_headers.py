r"""Unit tests for header helpers."""

from __future__ import annotations

import pytest

from arequest.utils.headers import (
    Authentication,
    basic_auth,
    bearer_auth,
    media_type,
    merge_headers,
    redact_headers,
)


def test_bearer_auth() -> None:
    assert bearer_auth("abc") == ("Authorization", "Bearer abc")


def test_basic_auth() -> None:
    assert basic_auth("user", "pass") == ("Authorization", "Basic dXNlcjpwYXNz")


def test_authentication_bearer() -> None:
    assert Authentication.bearer("tok").to_header() == ("Authorization", "Bearer tok")


def test_authentication_basic() -> None:
    assert Authentication.basic("user", "pass").to_header() == basic_auth("user", "pass")


def test_authentication_api_key() -> None:
    assert Authentication.api_key("X-API-Key", "k").to_header() == ("X-API-Key", "k")


def test_authentication_none() -> None:
    assert Authentication.none().to_header() is None


def test_authentication_repr_hides_secrets() -> None:
    text = repr(Authentication.basic("user", "hunter2"))
    assert "hunter2" not in text
    assert "user" in text


###################################
#     Tests for merge_headers     #
###################################


def test_merge_headers_later_layer_wins() -> None:
    assert merge_headers({"Accept": "text/plain"}, {"Accept": "application/json"}) == {
        "Accept": "application/json"
    }


def test_merge_headers_case_insensitive() -> None:
    merged = merge_headers({"Content-Type": "a", "X-A": "1"}, {"content-type": "b"})
    assert merged == {"X-A": "1", "content-type": "b"}


def test_merge_headers_skips_none_layers() -> None:
    assert merge_headers(None, {"X-A": "1"}, None) == {"X-A": "1"}


def test_merge_headers_does_not_modify_inputs() -> None:
    base = {"X-A": "1"}
    merge_headers(base, {"x-a": "2"})
    assert base == {"X-A": "1"}


################################
#     Tests for media_type     #
################################


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("application/json", "application/json"),
        ("application/json; charset=utf-8", "application/json"),
        ("text/html ;charset=latin-1", "text/html"),
        (None, None),
    ],
)
def test_media_type(content_type: str | None, expected: str | None) -> None:
    assert media_type(content_type) == expected


@pytest.mark.parametrize(
    "key",
    [
        "Authorization",
        "proxy-authorization",
        "Cookie",
        "X-API-Key",
        "X-Auth-Token",
        "X-Client-Secret",
    ],
)
def test_redact_headers_masks_credentials(key: str) -> None:
    assert redact_headers({key: "s3cr3t"}) == {key: "***"}


def test_redact_headers_keeps_other_headers() -> None:
    headers = {"Accept": "application/json", "Content-Type": "text/plain", "X-Trace": "1"}
    assert redact_headers(headers) == headers


def test_redact_headers_does_not_modify_input() -> None:
    headers = {"Authorization": "Bearer abc"}
    redact_headers(headers)
    assert headers == {"Authorization": "Bearer abc"}
