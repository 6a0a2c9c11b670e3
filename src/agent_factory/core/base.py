"""Shared CRUD behaviour for Agent Factory resource collections."""

from typing import Any

from agent_factory.models import QueryRefs
from agent_factory.utils.http_client import HttpClient


class ResourceClient:
    """Client for one REST collection (create, read, update, delete, list).

    Subclasses set ``endpoint`` to the collection path and add the
    relationship endpoints their resource supports.
    """

    endpoint: str = ""

    def __init__(self, http: HttpClient):
        """Initialize resource client.

        Args:
            http: Transport shared with the owning handler
        """
        self.http = http

    def _item_url(self, resource_id: str) -> str:
        return f"{self.endpoint}/{resource_id}"

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.http.post(self.endpoint, data)

    async def get(self, resource_id: str) -> dict[str, Any]:
        return await self.http.get(self._item_url(resource_id))

    async def update(self, resource_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.http.patch(self._item_url(resource_id), data)

    async def delete(self, resource_id: str) -> None:
        await self.http.delete(self._item_url(resource_id))

    async def list(self, query: QueryRefs | None = None, **filters: Any) -> Any:
        """List the collection.

        Args:
            query: Filters as a QueryRefs model
            **filters: Same filters as keyword arguments (created_by, org_id,
                page_token, max_results); these win over ``query``

        Returns:
            The server's listing payload, unmodified
        """
        refs = QueryRefs.model_validate({**(query.model_dump() if query else {}), **filters})
        return await self.http.get(self.endpoint, params=refs.to_params())
