"""HTTP transport for the Agent Factory API."""

import logging
from typing import Any

import httpx

from agent_factory.errors import TransportError
from agent_factory.utils.constants import DEFAULT_TIMEOUT, USER_AGENT


class HttpClient:
    """Thin async JSON client bound to one API base URL.

    Every verb returns the decoded response body. Failures of any kind are
    normalized into TransportError so callers handle a single error shape.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
    ):
        """Initialize the HTTP client.

        Args:
            base_url: API root, e.g. https://marco-api-dev.uk.r.appspot.com
            api_key: Bearer token attached to every request
            timeout: Request timeout in seconds
            debug: Log request/response pairs
        """
        self.debug = debug
        self.logger = logging.getLogger(__name__)

        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    async def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        data: Any = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP verb
            url: Path relative to the base URL
            params: Query parameters; None values are dropped
            data: JSON body

        Returns:
            Decoded JSON body, raw text for non-JSON bodies, or None if empty

        Raises:
            TransportError: On network failure, timeout, or non-2xx status
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        if self.debug:
            self.logger.info(f"[REQ] [{method}] {url} params={params} data={data}")

        try:
            response = await self._client.request(method, url, params=params, json=data)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            payload = self._error_payload(e.response)
            if self.debug:
                self.logger.error(
                    f"[RES] [{method}] {url} status={e.response.status_code} response={payload}"
                )
            message = payload.get("message") or str(e)
            raise TransportError(
                str(message), status_code=e.response.status_code, payload=payload
            ) from e
        except httpx.RequestError as e:
            if self.debug:
                self.logger.error(f"[RES] Network Error {method} {url}: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

        body = self._decode(response)
        if self.debug:
            self.logger.info(
                f"[RES] [{method}] {url} status={response.status_code} response={body}"
            )
        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _error_payload(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text} if response.text else {}
        return body if isinstance(body, dict) else {"detail": body}

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", url, params=params)

    async def post(self, url: str, data: Any = None) -> Any:
        return await self._request("POST", url, data=data)

    async def put(self, url: str, data: Any = None) -> Any:
        return await self._request("PUT", url, data=data)

    async def patch(self, url: str, data: Any = None) -> Any:
        return await self._request("PATCH", url, data=data)

    async def delete(self, url: str, data: Any = None) -> Any:
        return await self._request("DELETE", url, data=data)

    def set_auth_token(self, token: str) -> None:
        """Replace the bearer token used for subsequent requests."""
        self._client.headers["Authorization"] = f"Bearer {token}"

    def remove_auth_token(self) -> None:
        """Send subsequent requests without an Authorization header."""
        self._client.headers.pop("Authorization", None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
