"""Clients for resources that only support plain CRUD."""

from agent_factory.core.base import ResourceClient
from agent_factory.utils.constants import MODULES_ENDPOINT, SKILLS_ENDPOINT, TOOLS_ENDPOINT


class ToolsClient(ResourceClient):
    """Client for agent tool operations."""

    endpoint = TOOLS_ENDPOINT


class SkillsClient(ResourceClient):
    """Client for skill operations."""

    endpoint = SKILLS_ENDPOINT


class ModulesClient(ResourceClient):
    """Client for curriculum module operations."""

    endpoint = MODULES_ENDPOINT
