"""Shared sample data fixtures for testing."""

from typing import Any

import pytest

BASE_URL = "https://api.agentfactory.test"

# Sample response data constants
AGENT_DETAILS = {
    "id": "A1",
    "name": "tutor",
    "display_name": "Tutor",
    "role": "instructor",
    "system_instructions": "Be helpful.",
    "sessions": ["S1", "S2"],
}

SESSION_DETAILS = {
    "S1": {"id": "S1", "display_name": "Intro", "tasks": ["T1", "T2"]},
    "S2": {"id": "S2", "display_name": "Deep dive", "tasks": [{"id": "T3"}]},
    "S3": {"id": "S3", "display_name": "Empty", "tasks": []},
}

TASK_DETAILS = {
    "T1": {
        "id": "T1",
        "display_name": "Warm up",
        "skills": [{"id": "K1", "skill_name": "hint"}, {"id": "K2", "skill_name": "quiz"}],
    },
    "T2": {"id": "T2", "display_name": "Practice", "skills": []},
    "T3": {"id": "T3", "skills": [{"id": "K3"}]},
}


def chat_reply(message: str = "Hello from the agent", action: Any = None) -> dict[str, Any]:
    """Build a test-chat response body."""
    return {
        "message": message,
        "notes": "",
        "action": action,
        "agentState": {},
        "conversationHistory": [],
        "timestamp": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def base_url() -> str:
    """API root used by test handlers."""
    return BASE_URL


@pytest.fixture
def sample_agent_details() -> dict[str, Any]:
    """Agent detail payload with two sessions."""
    return dict(AGENT_DETAILS)


@pytest.fixture
def sample_chat_reply() -> dict[str, Any]:
    """Plain chat response without a function call."""
    return chat_reply()
