from typing import Any

from agent_factory.core.base import ResourceClient
from agent_factory.utils.constants import CURRICULUMS_ENDPOINT


class CurriculumsClient(ResourceClient):
    """Client for curriculum operations."""

    endpoint = CURRICULUMS_ENDPOINT

    async def add_module(self, curriculum_id: str, module_id: str) -> dict[str, Any]:
        """Attach a module to a curriculum."""
        return await self.http.post(
            f"{self._item_url(curriculum_id)}/modules", {"moduleId": module_id}
        )

    async def remove_module(self, curriculum_id: str, module_id: str) -> dict[str, Any]:
        """Detach a module from a curriculum."""
        return await self.http.delete(
            f"{self._item_url(curriculum_id)}/modules", {"moduleId": module_id}
        )
