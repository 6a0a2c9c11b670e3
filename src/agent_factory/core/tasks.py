from typing import Any

from agent_factory.core.base import ResourceClient
from agent_factory.utils.constants import TASKS_ENDPOINT


class TasksClient(ResourceClient):
    """Client for task operations."""

    endpoint = TASKS_ENDPOINT

    async def add_skill(self, task_id: str, skill_id: str) -> dict[str, Any]:
        """Attach a skill to a task."""
        return await self.http.post(f"{self._item_url(task_id)}/skills", {"skillId": skill_id})

    async def remove_skill(self, task_id: str, skill_id: str) -> dict[str, Any]:
        """Detach a skill from a task."""
        return await self.http.delete(f"{self._item_url(task_id)}/skills", {"skillId": skill_id})
