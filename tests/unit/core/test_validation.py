r"""Unit tests for parameter validation helpers."""

from __future__ import annotations

import pytest

from arequest.core.validation import (
    validate_jitter_range,
    validate_retry_params,
    validate_timeout,
)

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 1, 30.0, 60])
def test_validate_timeout_valid(timeout: float) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, 0.0, -1, -0.5])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


###########################################
#     Tests for validate_retry_params     #
###########################################


def test_validate_retry_params_valid() -> None:
    validate_retry_params(max_retries=0)
    validate_retry_params(max_retries=3, base_delay=0.0, max_delay=30.0, multiplier=1.0)


def test_validate_retry_params_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        validate_retry_params(max_retries=-1)


def test_validate_retry_params_negative_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be >= 0"):
        validate_retry_params(max_retries=3, base_delay=-0.1)


@pytest.mark.parametrize("max_delay", [0, -1.0])
def test_validate_retry_params_invalid_max_delay(max_delay: float) -> None:
    with pytest.raises(ValueError, match=r"max_delay must be > 0"):
        validate_retry_params(max_retries=3, max_delay=max_delay)


def test_validate_retry_params_invalid_multiplier() -> None:
    with pytest.raises(ValueError, match=r"multiplier must be >= 1"):
        validate_retry_params(max_retries=3, multiplier=0.9)


###########################################
#     Tests for validate_jitter_range     #
###########################################


@pytest.mark.parametrize("jitter_range", [(0.0, 0.0), (0.0, 0.1), (0.5, 1.5)])
def test_validate_jitter_range_valid(jitter_range: tuple[float, float]) -> None:
    validate_jitter_range(jitter_range)


def test_validate_jitter_range_negative() -> None:
    with pytest.raises(ValueError, match=r"jitter_range bounds must be >= 0"):
        validate_jitter_range((-0.1, 0.1))


def test_validate_jitter_range_inverted() -> None:
    with pytest.raises(ValueError, match=r"lower bound must not exceed upper bound"):
        validate_jitter_range((0.3, 0.1))
