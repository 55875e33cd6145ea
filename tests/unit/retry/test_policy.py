r"""Unit tests for retry policies and policy factories."""

from __future__ import annotations

import random
from unittest.mock import Mock

import pytest

from arequest.exceptions import (
    DecodingError,
    InvalidStatusCodeError,
    NetworkError,
    NoDataError,
)
from arequest.retry import (
    CustomRetryPolicy,
    DefaultRetryPolicy,
    ExponentialRetryPolicy,
    JitteredRetryPolicy,
    LinearRetryPolicy,
    NoRetryPolicy,
    RetryAfterPolicy,
    custom,
    exponential,
    is_transient_error,
    jittered,
    linear,
    no_retry,
)

###################################
#     Tests for NoRetryPolicy     #
###################################


def test_no_retry_policy() -> None:
    policy = NoRetryPolicy()
    assert policy.max_retries == 0
    assert not policy.should_retry(NetworkError("down"), 0)
    assert not policy.should_retry(InvalidStatusCodeError(503), 0)
    assert policy.delay(0) == 0.0


#######################################
#     Tests for LinearRetryPolicy     #
#######################################


def test_linear_retry_policy_constant_delay() -> None:
    policy = LinearRetryPolicy(max_retries=3, delay=0.5)
    assert [policy.delay(attempt) for attempt in range(3)] == [0.5, 0.5, 0.5]


def test_linear_retry_policy_defaults() -> None:
    policy = LinearRetryPolicy()
    assert policy.max_retries == 3
    assert policy.delay(0) == 1.0


def test_linear_retry_policy_ceiling() -> None:
    policy = LinearRetryPolicy(max_retries=1, delay=0.0)
    assert policy.should_retry(InvalidStatusCodeError(503), 0)
    assert not policy.should_retry(InvalidStatusCodeError(503), 1)


def test_linear_retry_policy_invalid_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        LinearRetryPolicy(max_retries=-1)


def test_linear_retry_policy_invalid_delay() -> None:
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        LinearRetryPolicy(delay=-1.0)


############################################
#     Tests for ExponentialRetryPolicy     #
############################################


def test_exponential_retry_policy_delays() -> None:
    policy = ExponentialRetryPolicy(max_retries=6, base_delay=1.0, multiplier=2.0, max_delay=30.0)
    assert [policy.delay(attempt) for attempt in range(6)] == [1.0, 2.0, 4.0, 8.0, 16.0, 30.0]


def test_exponential_retry_policy_defaults() -> None:
    policy = ExponentialRetryPolicy()
    assert policy.max_retries == 3
    assert policy.delay(0) == 1.0
    assert policy.delay(10) == 30.0


def test_default_retry_policy_is_exponential() -> None:
    assert DefaultRetryPolicy is ExponentialRetryPolicy


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (NetworkError("down"), True),
        (InvalidStatusCodeError(500), True),
        (InvalidStatusCodeError(404), False),
        (DecodingError("bad"), False),
        (NoDataError(200), True),
    ],
)
def test_exponential_retry_policy_should_retry(error: Exception, expected: bool) -> None:
    assert ExponentialRetryPolicy().should_retry(error, 0) is expected


def test_exponential_retry_policy_invalid_multiplier() -> None:
    with pytest.raises(ValueError, match=r"multiplier must be >= 1"):
        ExponentialRetryPolicy(multiplier=0.5)


def test_exponential_retry_policy_invalid_max_delay() -> None:
    with pytest.raises(ValueError, match=r"max_delay must be > 0"):
        ExponentialRetryPolicy(max_delay=0.0)


def test_exponential_retry_policy_invalid_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be >= 0"):
        ExponentialRetryPolicy(base_delay=-1.0)


#########################################
#     Tests for JitteredRetryPolicy     #
#########################################


def test_jittered_retry_policy_bounds() -> None:
    policy = JitteredRetryPolicy(max_retries=5, rng=random.Random(3))
    for attempt in range(5):
        exponential_delay = min(2.0**attempt, 30.0)
        assert exponential_delay <= policy.delay(attempt) <= min(exponential_delay * 1.1, 30.0)


def test_jittered_retry_policy_never_exceeds_cap() -> None:
    policy = JitteredRetryPolicy(max_retries=10, max_delay=30.0, jitter_range=(1.0, 1.0))
    assert policy.delay(4) == 30.0  # 16 + 16 capped
    assert policy.delay(9) == 30.0


def test_jittered_retry_policy_invalid_jitter_range() -> None:
    with pytest.raises(ValueError, match=r"jitter_range"):
        JitteredRetryPolicy(jitter_range=(0.5, 0.1))


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"base_delay": -0.5}, r"base_delay must be >= 0"),
        ({"max_delay": -1.0}, r"max_delay must be > 0"),
        ({"multiplier": 0.5}, r"multiplier must be >= 1"),
    ],
)
def test_jittered_retry_policy_invalid_delay_params(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        JitteredRetryPolicy(**kwargs)


#######################################
#     Tests for CustomRetryPolicy     #
#######################################


def test_custom_retry_policy_uses_functions() -> None:
    retry_if = Mock(return_value=True)
    policy = CustomRetryPolicy(max_retries=2, delay_func=lambda attempt: attempt * 0.5, retry_if=retry_if)
    error = NoDataError(200)
    assert policy.should_retry(error, 1)
    retry_if.assert_called_once_with(error, 1)
    assert policy.delay(1) == 0.5


def test_custom_retry_policy_enforces_ceiling() -> None:
    retry_if = Mock(return_value=True)
    policy = CustomRetryPolicy(max_retries=2, delay_func=lambda attempt: 0.0, retry_if=retry_if)
    assert not policy.should_retry(NetworkError("down"), 2)
    retry_if.assert_not_called()


def test_custom_retry_policy_accepts_any_exception() -> None:
    policy = CustomRetryPolicy(
        max_retries=1,
        delay_func=lambda attempt: 0.0,
        retry_if=lambda error, attempt: isinstance(error, KeyError),
    )
    assert policy.should_retry(KeyError("x"), 0)
    assert not policy.should_retry(InvalidStatusCodeError(503), 0)


def test_custom_retry_policy_with_transient_predicate() -> None:
    policy = CustomRetryPolicy(
        max_retries=3,
        delay_func=lambda attempt: 0.0,
        retry_if=lambda error, attempt: is_transient_error(error),
    )
    assert policy.should_retry(InvalidStatusCodeError(502), 0)
    assert not policy.should_retry(NoDataError(200), 0)


def test_custom_retry_policy_invalid_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        CustomRetryPolicy(max_retries=-2, delay_func=lambda attempt: 0.0, retry_if=Mock())


######################################
#     Tests for RetryAfterPolicy     #
######################################


def test_retry_after_policy_uses_header() -> None:
    policy = RetryAfterPolicy(LinearRetryPolicy(delay=1.0))
    error = InvalidStatusCodeError(503, headers={"Retry-After": "7"})
    assert policy.delay(0, error) == 7.0


def test_retry_after_policy_header_case_insensitive() -> None:
    policy = RetryAfterPolicy(LinearRetryPolicy(delay=1.0))
    error = InvalidStatusCodeError(429, headers={"retry-after": "3"})
    assert policy.delay(0, error) == 3.0


def test_retry_after_policy_falls_back_to_inner_delay() -> None:
    policy = RetryAfterPolicy(ExponentialRetryPolicy())
    assert policy.delay(2, InvalidStatusCodeError(503)) == 4.0
    assert policy.delay(2, NetworkError("down")) == 4.0
    assert policy.delay(2) == 4.0


def test_retry_after_policy_infinite_header_uses_inner_delay() -> None:
    policy = RetryAfterPolicy(LinearRetryPolicy(delay=1.5))
    error = InvalidStatusCodeError(503, headers={"Retry-After": "inf"})
    assert policy.delay(0, error) == 1.5


def test_retry_after_policy_unparseable_header() -> None:
    policy = RetryAfterPolicy(LinearRetryPolicy(delay=1.5))
    error = InvalidStatusCodeError(503, headers={"Retry-After": "soon"})
    assert policy.delay(0, error) == 1.5


def test_retry_after_policy_caps_with_max_wait() -> None:
    policy = RetryAfterPolicy(LinearRetryPolicy(), max_wait=10.0)
    error = InvalidStatusCodeError(503, headers={"Retry-After": "120"})
    assert policy.delay(0, error) == 10.0


def test_retry_after_policy_delegates_decisions() -> None:
    inner = LinearRetryPolicy(max_retries=2)
    policy = RetryAfterPolicy(inner)
    assert policy.max_retries == 2
    assert policy.should_retry(InvalidStatusCodeError(503), 0)
    assert not policy.should_retry(InvalidStatusCodeError(404), 0)
    assert not policy.should_retry(InvalidStatusCodeError(503), 2)


def test_retry_after_policy_invalid_max_wait() -> None:
    with pytest.raises(ValueError, match=r"max_wait must be > 0"):
        RetryAfterPolicy(NoRetryPolicy(), max_wait=0)


#######################################
#     Tests for policy factories      #
#######################################


def test_factory_no_retry() -> None:
    assert isinstance(no_retry(), NoRetryPolicy)


def test_factory_linear() -> None:
    policy = linear(max_retries=1, delay=0.0)
    assert isinstance(policy, LinearRetryPolicy)
    assert policy.max_retries == 1
    assert policy.delay(0) == 0.0


def test_factory_exponential() -> None:
    policy = exponential(max_retries=5, base_delay=0.5, max_delay=4.0)
    assert isinstance(policy, ExponentialRetryPolicy)
    assert [policy.delay(attempt) for attempt in range(5)] == [0.5, 1.0, 2.0, 4.0, 4.0]


def test_factory_jittered() -> None:
    policy = jittered(max_retries=2, jitter_range=(0.0, 0.0))
    assert isinstance(policy, JitteredRetryPolicy)
    assert policy.delay(1) == 2.0


def test_factory_custom() -> None:
    policy = custom(max_retries=4, delay_func=lambda attempt: 0.25, retry_if=lambda e, a: True)
    assert isinstance(policy, CustomRetryPolicy)
    assert policy.max_retries == 4
    assert policy.delay(3) == 0.25
