"""Global pytest configuration and fixtures."""

from collections.abc import Generator
from typing import Any

import pytest
import respx

from tests.fixtures.env_helpers import empty_env, mock_env_vars
from tests.fixtures.http_helpers import common_http_errors, http_mock_helpers

# Import shared fixtures (avoid duplicating existing ones)
from tests.fixtures.mock_clients import (
    handler,
    http_client,
    mock_http_client,
    recorded_events,
)
from tests.fixtures.sample_data import (
    base_url,
    sample_agent_details,
    sample_chat_reply,
)


@pytest.fixture
def respx_mock() -> Generator[Any, None, None]:
    """Provide respx mock for testing HTTP requests."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


def pytest_addoption(parser: Any) -> None:
    """Add custom command line options for live API testing."""
    parser.addoption(
        "--live-api",
        action="store_true",
        default=False,
        help="Run integration tests against AGENT_FACTORY_BASE_URL",
    )


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:
    """Skip integration tests unless --live-api is given."""
    if config.getoption("--live-api"):
        return
    skip_live = pytest.mark.skip(reason="needs --live-api")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_live)
