from typing import Any

from agent_factory.core.base import ResourceClient
from agent_factory.utils.constants import SESSIONS_ENDPOINT


class SessionsClient(ResourceClient):
    """Client for session operations."""

    endpoint = SESSIONS_ENDPOINT

    async def add_task(self, session_id: str, task_id: str) -> dict[str, Any]:
        """Attach a task to a session."""
        return await self.http.post(f"{self._item_url(session_id)}/tasks", {"taskId": task_id})

    async def remove_task(self, session_id: str, task_id: str) -> dict[str, Any]:
        """Detach a task from a session."""
        return await self.http.delete(f"{self._item_url(session_id)}/tasks", {"taskId": task_id})
