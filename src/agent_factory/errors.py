"""Exceptions raised by the Agent Factory SDK."""

from typing import Any


class AgentFactoryError(Exception):
    """Base exception for SDK errors"""

    pass


class TransportError(AgentFactoryError):
    """HTTP request failed: network error, timeout, or non-2xx response.

    Attributes:
        message: Server-supplied message when available, else the client error text
        status_code: HTTP status, None when no response was received
        payload: Decoded JSON error body from the server, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self) -> dict[str, Any]:
        """Error envelope in the shape the API uses: {message, ...payload}."""
        return {**self.payload, "message": self.message}


class InitializationError(AgentFactoryError):
    """Agent state could not be bootstrapped from the server"""

    def __init__(self, agent_id: str, message: str):
        super().__init__(message)
        self.agent_id = agent_id


class SelectionError(AgentFactoryError):
    """A session, task, or skill selector could not be resolved"""

    pass


class MissingArgumentError(AgentFactoryError):
    """A function call arrived without a required argument"""

    def __init__(self, function_name: str, argument: str):
        super().__init__(f"Missing {argument} in {function_name} function call")
        self.function_name = function_name
        self.argument = argument


class UnknownFunctionCallError(AgentFactoryError):
    """The server issued a function call this client does not implement"""

    def __init__(self, function_name: str):
        super().__init__(f"Unknown function call: {function_name}")
        self.function_name = function_name


class ResponseFormatError(AgentFactoryError):
    """A 2xx response body did not have the expected shape"""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.body = body
