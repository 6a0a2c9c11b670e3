"""REST resource clients."""

from agent_factory.core.agents import AgentsClient
from agent_factory.core.base import ResourceClient
from agent_factory.core.catalog import ModulesClient, SkillsClient, ToolsClient
from agent_factory.core.curriculums import CurriculumsClient
from agent_factory.core.sessions import SessionsClient
from agent_factory.core.tasks import TasksClient

__all__ = [
    "ResourceClient",
    "AgentsClient",
    "ToolsClient",
    "SkillsClient",
    "SessionsClient",
    "TasksClient",
    "CurriculumsClient",
    "ModulesClient",
]
