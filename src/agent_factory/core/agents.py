from typing import Any

from agent_factory.core.base import ResourceClient
from agent_factory.utils.constants import AGENT_DETAILS_ENDPOINT, AGENTS_ENDPOINT


class AgentsClient(ResourceClient):
    """Client for agent operations."""

    endpoint = AGENTS_ENDPOINT

    async def get_details(self, agent_id: str) -> dict[str, Any]:
        """Fetch an agent with its sessions, tools and curricula expanded.

        Args:
            agent_id: Agent identifier

        Returns:
            dict: Agent detail payload; ``sessions`` lists session ids or objects
        """
        return await self.http.get(f"{AGENT_DETAILS_ENDPOINT}/{agent_id}")

    async def add_session(self, agent_id: str, session_data: dict[str, Any]) -> dict[str, Any]:
        return await self.http.post(f"{self._item_url(agent_id)}/sessions", session_data)

    async def remove_session(
        self, agent_id: str, session_data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.http.delete(f"{self._item_url(agent_id)}/sessions", session_data)

    async def get_compiled(self) -> dict[str, Any]:
        """Get a compiled agent with all its components assembled."""
        return await self.http.get(f"{self.endpoint}/compiled")

    async def get_compiled_notes(self) -> Any:
        """Get compiled notes from agent interactions."""
        return await self.http.get(f"{self.endpoint}/compiled/notes")
