"""Lifecycle events published by AgentFactoryHandler and their payloads."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from agent_factory.models import AgentState, FunctionCall, Message


class AgentFactoryEvent(str, Enum):
    """Every event the handler can publish."""

    AGENT_STATE_INITIALIZED = "agentStateInitialized"
    AGENT_STATE_INITIALIZED_ERROR = "agentStateInitializedError"
    MESSAGE_SENT = "messageSent"
    MESSAGE_RECEIVED = "messageReceived"
    TASK_SWITCHED = "taskSwitched"
    SESSION_SWITCHED = "sessionSwitched"
    SKILL_CALLED = "skillCalled"
    FUNCTION_CALL_RECEIVED = "functionCallReceived"
    FUNCTION_CALL_APPROVED = "functionCallApproved"
    FUNCTION_CALL_DECLINED = "functionCallDeclined"
    FUNCTION_CALL_EXECUTED = "functionCallExecuted"
    CONVERSATION_HISTORY_UPDATED = "conversationHistoryUpdated"


class AgentStateInitializedPayload(BaseModel):
    agent_state: AgentState


class AgentStateInitializedErrorPayload(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    error: Exception
    agent_id: str


class MessageSentPayload(BaseModel):
    message: str
    agent_state: AgentState


class MessageReceivedPayload(BaseModel):
    message: str
    response: Any
    agent_state: AgentState


class TaskSwitchedPayload(BaseModel):
    old_task_id: str | None = None
    new_task_id: str
    agent_state: AgentState


class SessionSwitchedPayload(BaseModel):
    old_session_id: str | None = None
    new_session_id: str
    agent_state: AgentState


class SkillCalledPayload(BaseModel):
    skill_id: str
    message: str
    agent_state: AgentState


class FunctionCallReceivedPayload(BaseModel):
    function_call: FunctionCall
    agent_state: AgentState


class FunctionCallApprovedPayload(BaseModel):
    function_call: FunctionCall
    agent_state: AgentState


class FunctionCallDeclinedPayload(BaseModel):
    function_call: FunctionCall
    agent_state: AgentState


class FunctionCallExecutedPayload(BaseModel):
    function_call: FunctionCall
    result: Any
    agent_state: AgentState


class ConversationHistoryUpdatedPayload(BaseModel):
    history: list[Message]
    agent_state: AgentState


EVENT_PAYLOADS: dict[AgentFactoryEvent, type[BaseModel]] = {
    AgentFactoryEvent.AGENT_STATE_INITIALIZED: AgentStateInitializedPayload,
    AgentFactoryEvent.AGENT_STATE_INITIALIZED_ERROR: AgentStateInitializedErrorPayload,
    AgentFactoryEvent.MESSAGE_SENT: MessageSentPayload,
    AgentFactoryEvent.MESSAGE_RECEIVED: MessageReceivedPayload,
    AgentFactoryEvent.TASK_SWITCHED: TaskSwitchedPayload,
    AgentFactoryEvent.SESSION_SWITCHED: SessionSwitchedPayload,
    AgentFactoryEvent.SKILL_CALLED: SkillCalledPayload,
    AgentFactoryEvent.FUNCTION_CALL_RECEIVED: FunctionCallReceivedPayload,
    AgentFactoryEvent.FUNCTION_CALL_APPROVED: FunctionCallApprovedPayload,
    AgentFactoryEvent.FUNCTION_CALL_DECLINED: FunctionCallDeclinedPayload,
    AgentFactoryEvent.FUNCTION_CALL_EXECUTED: FunctionCallExecutedPayload,
    AgentFactoryEvent.CONVERSATION_HISTORY_UPDATED: ConversationHistoryUpdatedPayload,
}
