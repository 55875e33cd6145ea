from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from arequest.callbacks import BaseRequestLogger


@pytest.fixture
def mock_asleep() -> AsyncMock:
    """Create an async sleep replacement to inject into executors so
    tests run without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_request_logger() -> Mock:
    """Create a mock request logger recording every lifecycle event."""
    return Mock(spec=BaseRequestLogger)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    This fixture provides a simple Mock object that can be used to test
    callback functionality across different test scenarios.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
