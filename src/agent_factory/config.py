"""
Configuration for the Agent Factory SDK.

Defaults are read from the environment once at import time; any of them can be
overridden per handler through AgentFactoryOptions.
"""

import os

from pydantic import BaseModel, Field

from agent_factory.utils.constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

ENV_VAR_API_KEY = "AGENT_FACTORY_API_KEY"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


BASE_URL = os.getenv("AGENT_FACTORY_BASE_URL", DEFAULT_BASE_URL)
TIMEOUT = float(os.getenv("AGENT_FACTORY_TIMEOUT", str(DEFAULT_TIMEOUT)))
DEBUG = _env_flag("AGENT_FACTORY_DEBUG")


class AgentFactoryOptions(BaseModel):
    """Construction options for AgentFactoryHandler."""

    base_url: str = Field(default=BASE_URL, description="API root URL")
    timeout: float = Field(default=TIMEOUT, gt=0, description="Per-request timeout in seconds")
    debug: bool = Field(default=DEBUG, description="Log every request/response pair")
    auto_use_skill: bool = True
    auto_switch_task: bool = True
    auto_switch_session: bool = True


def options_from_env(**overrides: object) -> AgentFactoryOptions:
    """Build options from the current environment, e.g. after loading a .env file."""
    values: dict[str, object] = {
        "base_url": os.getenv("AGENT_FACTORY_BASE_URL", DEFAULT_BASE_URL),
        "timeout": float(os.getenv("AGENT_FACTORY_TIMEOUT", str(DEFAULT_TIMEOUT))),
        "debug": _env_flag("AGENT_FACTORY_DEBUG"),
    }
    values.update(overrides)
    return AgentFactoryOptions(**values)
