"""Environment and configuration helpers for testing."""

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture
def mock_env_vars() -> Generator[None, None, None]:
    """Mock environment variables for the SDK."""
    with patch.dict(
        os.environ,
        {
            "AGENT_FACTORY_API_KEY": "af-test1234567890",
            "AGENT_FACTORY_BASE_URL": "https://env.agentfactory.test",
            "AGENT_FACTORY_TIMEOUT": "15",
            "AGENT_FACTORY_DEBUG": "true",
        },
    ):
        yield


@pytest.fixture
def empty_env() -> Generator[None, None, None]:
    """Empty environment variables."""
    with patch.dict(os.environ, {}, clear=True):
        yield
