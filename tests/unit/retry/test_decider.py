r"""Unit tests for retry decision logic."""

from __future__ import annotations

import pytest

from arequest.exceptions import (
    BadURLError,
    DecodingError,
    EncodingError,
    InvalidContentTypeError,
    InvalidEndpointError,
    InvalidJSONError,
    InvalidStatusCodeError,
    NetworkError,
    NoDataError,
    NoResponseError,
    RequestTimeoutError,
)
from arequest.retry import RetryDecider, is_retryable_error, is_transient_error

########################################
#     Tests for is_retryable_error     #
########################################


@pytest.mark.parametrize(
    "error",
    [
        NetworkError("connection reset"),
        RequestTimeoutError("timed out"),
        NoResponseError("no response"),
        NoDataError(200),
        InvalidContentTypeError("text/html"),
        InvalidStatusCodeError(500),
        InvalidStatusCodeError(503),
        InvalidStatusCodeError(599),
        InvalidStatusCodeError(302),
    ],
)
def test_is_retryable_error_true(error: Exception) -> None:
    assert is_retryable_error(error)


@pytest.mark.parametrize(
    "error",
    [
        InvalidStatusCodeError(400),
        InvalidStatusCodeError(404),
        InvalidStatusCodeError(429),
        InvalidStatusCodeError(499),
        DecodingError("bad shape"),
        InvalidJSONError("bad json"),
        InvalidEndpointError("no domain"),
        BadURLError("::"),
        EncodingError("cannot encode"),
        ValueError("not classified"),
    ],
)
def test_is_retryable_error_false(error: Exception) -> None:
    assert not is_retryable_error(error)


########################################
#     Tests for is_transient_error     #
########################################


@pytest.mark.parametrize(
    "error",
    [
        NetworkError("down"),
        RequestTimeoutError("slow"),
        NoResponseError("none"),
        InvalidStatusCodeError(502),
    ],
)
def test_is_transient_error_true(error: Exception) -> None:
    assert is_transient_error(error)


@pytest.mark.parametrize(
    "error",
    [
        InvalidStatusCodeError(404),
        InvalidStatusCodeError(302),
        NoDataError(200),
        InvalidContentTypeError("text/html"),
        DecodingError("bad"),
        RuntimeError("boom"),
    ],
)
def test_is_transient_error_false(error: Exception) -> None:
    assert not is_transient_error(error)


##################################
#     Tests for RetryDecider     #
##################################


def test_retry_decider_has_retries_left() -> None:
    decider = RetryDecider(max_retries=2)
    assert decider.has_retries_left(0)
    assert decider.has_retries_left(1)
    assert not decider.has_retries_left(2)


def test_retry_decider_retries_retryable_error() -> None:
    decider = RetryDecider(max_retries=3)
    assert decider.should_retry(InvalidStatusCodeError(503), 0)


def test_retry_decider_stops_at_ceiling() -> None:
    decider = RetryDecider(max_retries=3)
    assert not decider.should_retry(InvalidStatusCodeError(503), 3)


def test_retry_decider_zero_retries() -> None:
    assert not RetryDecider(max_retries=0).should_retry(NetworkError("down"), 0)


def test_retry_decider_never_retries_client_error() -> None:
    assert not RetryDecider(max_retries=3).should_retry(InvalidStatusCodeError(404), 0)


def test_retry_decider_repr() -> None:
    assert repr(RetryDecider(max_retries=2)) == "RetryDecider(max_retries=2)"
