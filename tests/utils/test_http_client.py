import json
import logging
from typing import Any

import pytest
from httpx import Response

from agent_factory.errors import TransportError
from agent_factory.utils.constants import USER_AGENT
from agent_factory.utils.http_client import HttpClient


class TestHttpClient:
    """Test suite for the HTTP transport."""

    @pytest.mark.unit
    async def test_get_returns_decoded_json(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test successful JSON GET with default headers."""
        route = respx_mock.get(f"{base_url}/v2/agents/tools/X1").mock(
            return_value=Response(200, json={"id": "X1", "name": "search"})
        )

        result = await http_client.get("/v2/agents/tools/X1")

        assert result == {"id": "X1", "name": "search"}
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["User-Agent"] == USER_AGENT
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.unit
    async def test_get_drops_none_params(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test that query parameters set to None are not sent."""
        route = respx_mock.get(f"{base_url}/v2/agents/tools").mock(
            return_value=Response(200, json=[])
        )

        await http_client.get("/v2/agents/tools", params={"org_id": "O1", "page_token": None})

        params = route.calls.last.request.url.params
        assert params["org_id"] == "O1"
        assert "page_token" not in params

    @pytest.mark.unit
    @pytest.mark.parametrize("method", ["post", "put", "patch", "delete"])
    async def test_body_verbs_send_json(
        self, respx_mock: Any, http_client: HttpClient, base_url: str, method: str
    ) -> None:
        """Test that every body-carrying verb sends a JSON payload."""
        route = respx_mock.route(method=method.upper(), url=f"{base_url}/v2/agents/tasks/T1/skills").mock(
            return_value=Response(200, json={"ok": True})
        )

        result = await getattr(http_client, method)("/v2/agents/tasks/T1/skills", {"skillId": "K1"})

        assert result == {"ok": True}
        assert json.loads(route.calls.last.request.content) == {"skillId": "K1"}

    @pytest.mark.unit
    async def test_empty_body_returns_none(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test that a 204 response decodes to None."""
        respx_mock.delete(f"{base_url}/v2/agents/skills/K1").mock(return_value=Response(204))

        assert await http_client.delete("/v2/agents/skills/K1") is None

    @pytest.mark.unit
    async def test_error_response_carries_server_payload(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test non-2xx normalization with a JSON error envelope."""
        respx_mock.get(f"{base_url}/v2/agents/agents/missing").mock(
            return_value=Response(404, json={"message": "Agent not found", "code": "NOT_FOUND"})
        )

        with pytest.raises(TransportError) as exc_info:
            await http_client.get("/v2/agents/agents/missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.message == "Agent not found"
        assert error.payload["code"] == "NOT_FOUND"
        assert error.to_dict() == {"message": "Agent not found", "code": "NOT_FOUND"}

    @pytest.mark.unit
    async def test_error_response_without_json(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test non-2xx normalization when the body is plain text."""
        respx_mock.post(f"{base_url}/chat/test-chat").mock(
            return_value=Response(502, text="Bad gateway")
        )

        with pytest.raises(TransportError) as exc_info:
            await http_client.post("/chat/test-chat", {"message": "hi"})

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad gateway"

    @pytest.mark.unit
    @pytest.mark.parametrize("error_type", ["timeout", "connection_error"])
    async def test_network_errors(
        self,
        respx_mock: Any,
        http_client: HttpClient,
        base_url: str,
        common_http_errors: Any,
        error_type: str,
    ) -> None:
        """Test that timeouts and connection failures become TransportError."""
        respx_mock.get(f"{base_url}/v2/agents/modules").mock(
            side_effect=common_http_errors[error_type]
        )

        with pytest.raises(TransportError) as exc_info:
            await http_client.get("/v2/agents/modules")

        assert exc_info.value.status_code is None
        assert exc_info.value.payload == {}
        assert isinstance(exc_info.value.__cause__, type(common_http_errors[error_type]))

    @pytest.mark.unit
    async def test_auth_token_can_be_replaced_and_removed(
        self, respx_mock: Any, http_client: HttpClient, base_url: str
    ) -> None:
        """Test bearer token management."""
        route = respx_mock.get(f"{base_url}/v2/agents/skills").mock(
            return_value=Response(200, json=[])
        )

        http_client.set_auth_token("rotated")
        await http_client.get("/v2/agents/skills")
        assert route.calls.last.request.headers["Authorization"] == "Bearer rotated"

        http_client.remove_auth_token()
        await http_client.get("/v2/agents/skills")
        assert "Authorization" not in route.calls.last.request.headers

    @pytest.mark.unit
    async def test_no_authorization_header_without_key(
        self, respx_mock: Any, base_url: str
    ) -> None:
        """Test that an anonymous client sends no bearer token."""
        route = respx_mock.get(f"{base_url}/v2/agents/skills").mock(
            return_value=Response(200, json=[])
        )

        async with HttpClient(base_url=base_url) as client:
            await client.get("/v2/agents/skills")

        assert "Authorization" not in route.calls.last.request.headers

    @pytest.mark.unit
    async def test_debug_logs_request_and_response(
        self, respx_mock: Any, base_url: str, caplog: Any
    ) -> None:
        """Test request/response logging when debug is enabled."""
        respx_mock.get(f"{base_url}/v2/agents/tools").mock(return_value=Response(200, json=[]))

        async with HttpClient(base_url=base_url, debug=True) as client:
            with caplog.at_level(logging.INFO, logger="agent_factory.utils.http_client"):
                await client.get("/v2/agents/tools")

        messages = [record.getMessage() for record in caplog.records]
        assert any(m.startswith("[REQ] [GET] /v2/agents/tools") for m in messages)
        assert any(m.startswith("[RES] [GET] /v2/agents/tools status=200") for m in messages)

    @pytest.mark.unit
    async def test_quiet_without_debug(
        self, respx_mock: Any, http_client: HttpClient, base_url: str, caplog: Any
    ) -> None:
        """Test that nothing is logged for successful calls when debug is off."""
        respx_mock.get(f"{base_url}/v2/agents/tools").mock(return_value=Response(200, json=[]))

        with caplog.at_level(logging.DEBUG, logger="agent_factory.utils.http_client"):
            await http_client.get("/v2/agents/tools")

        assert [r for r in caplog.records if r.name == "agent_factory.utils.http_client"] == []
