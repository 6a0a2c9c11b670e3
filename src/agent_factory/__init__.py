"""Python SDK for the Agent Factory agent-management API."""

from agent_factory.config import AgentFactoryOptions
from agent_factory.errors import (
    AgentFactoryError,
    InitializationError,
    MissingArgumentError,
    ResponseFormatError,
    SelectionError,
    TransportError,
    UnknownFunctionCallError,
)
from agent_factory.events import EventEmitter
from agent_factory.handler import AgentFactoryHandler
from agent_factory.models import (
    AgentState,
    ChatResponse,
    FunctionCall,
    FunctionCallResult,
    FunctionCallStatus,
    FunctionResponse,
    Message,
    MessageMeta,
    Part,
    PendingFunctionCall,
    QueryRefs,
)
from agent_factory.notifications import AgentFactoryEvent
from agent_factory.utils.http_client import HttpClient

__all__ = [
    # Client
    "AgentFactoryHandler",
    "AgentFactoryOptions",
    "HttpClient",
    # Events
    "AgentFactoryEvent",
    "EventEmitter",
    # Models
    "AgentState",
    "ChatResponse",
    "FunctionCall",
    "FunctionCallResult",
    "FunctionCallStatus",
    "FunctionResponse",
    "Message",
    "MessageMeta",
    "Part",
    "PendingFunctionCall",
    "QueryRefs",
    # Errors
    "AgentFactoryError",
    "TransportError",
    "InitializationError",
    "SelectionError",
    "MissingArgumentError",
    "UnknownFunctionCallError",
    "ResponseFormatError",
]
