"""Pydantic models for agent state, conversation history and chat responses."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> datetime:
    return datetime.now()


def _clock_time() -> str:
    return datetime.now().strftime("%I:%M:%S %p")


class FunctionCallStatus(str, Enum):
    """Disposition of a function call recorded in conversation history."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class FunctionCall(BaseModel):
    """Instruction issued by the server in a chat response."""

    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class FunctionResponse(BaseModel):
    """Result of a function call reported back in history."""

    name: str
    response: Any = None


class Part(BaseModel):
    """One fragment of a message: free text and/or a function call payload."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    text: str | None = None
    function_call: FunctionCall | None = Field(default=None, alias="functionCall")
    function_response: FunctionResponse | None = Field(
        default=None, alias="functionResponse"
    )


class MessageMeta(BaseModel):
    """Client-side bookkeeping attached to a message."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str | None = None
    function_call_status: FunctionCallStatus | None = Field(
        default=None, alias="functionCallStatus"
    )


class Message(BaseModel):
    """A conversation history entry."""

    model_config = ConfigDict(populate_by_name=True)

    role: Literal["user", "model"]
    parts: list[Part] = Field(default_factory=list)
    meta: MessageMeta = Field(default_factory=MessageMeta, alias="_meta")

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", parts=[Part(text=text)], meta=MessageMeta(timestamp=_clock_time()))

    @classmethod
    def model(cls, text: str) -> "Message":
        return cls(role="model", parts=[Part(text=text)], meta=MessageMeta(timestamp=_clock_time()))

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts if part.text)

    def has_function_call(self, name: str) -> bool:
        """Check whether any part carries a function call with this name."""
        return any(
            part.function_call is not None and part.function_call.name == name
            for part in self.parts
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class AgentState(BaseModel):
    """The currently selected agent, session and task.

    Empty identifiers mean "unset". The detail dicts are the last payloads
    fetched from the server and are refreshed only by initialize/switch calls.
    """

    agent_id: str = ""
    agent_details: dict[str, Any] = Field(
        default_factory=lambda: {
            "system_instructions": "",
            "role": "",
            "tools": [],
            "sessions": [],
            "name": "",
        }
    )
    session_id: str = ""
    session_details: dict[str, Any] = Field(default_factory=dict)
    task_id: str = ""
    task_details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ChatResponse(BaseModel):
    """Response body of the test-chat and test-skill endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: str | None = None
    notes: Any = None
    action: FunctionCall | None = None
    agent_state: dict[str, Any] | None = Field(default=None, alias="agentState")
    conversation_history: list[Any] = Field(
        default_factory=list, alias="conversationHistory"
    )
    timestamp: str | None = None

    @field_validator("action", mode="before")
    @classmethod
    def _empty_action_is_none(cls, value: Any) -> Any:
        return value or None


class PendingFunctionCall(BaseModel):
    """A function call held back for manual approval."""

    model_config = ConfigDict(populate_by_name=True)

    function_call: FunctionCall = Field(alias="functionCall")
    requires_approval: bool = Field(default=True, alias="requiresApproval")


class FunctionCallResult(BaseModel):
    """Outcome of an executed switchSession or useSkill function call."""

    success: bool
    message: str
    result: Any = None


class QueryRefs(BaseModel):
    """Filters accepted by the list endpoints."""

    created_by: str | None = None
    org_id: str | None = None
    page_token: str | None = None
    max_results: int | None = None

    def to_params(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.model_dump().items() if value}
