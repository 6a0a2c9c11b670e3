"""Agent Factory client: resource access plus the test-chat conversation loop."""

import logging
import os
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from agent_factory.config import ENV_VAR_API_KEY, AgentFactoryOptions, options_from_env
from agent_factory.core import (
    AgentsClient,
    CurriculumsClient,
    ModulesClient,
    SessionsClient,
    SkillsClient,
    TasksClient,
    ToolsClient,
)
from agent_factory.errors import (
    AgentFactoryError,
    InitializationError,
    MissingArgumentError,
    ResponseFormatError,
    SelectionError,
    UnknownFunctionCallError,
)
from agent_factory.events import EventEmitter, Handler
from agent_factory.models import (
    AgentState,
    ChatResponse,
    FunctionCall,
    FunctionCallResult,
    FunctionCallStatus,
    Message,
    PendingFunctionCall,
)
from agent_factory.notifications import (
    EVENT_PAYLOADS,
    AgentFactoryEvent,
    AgentStateInitializedErrorPayload,
    AgentStateInitializedPayload,
    ConversationHistoryUpdatedPayload,
    FunctionCallApprovedPayload,
    FunctionCallDeclinedPayload,
    FunctionCallExecutedPayload,
    FunctionCallReceivedPayload,
    MessageReceivedPayload,
    MessageSentPayload,
    SessionSwitchedPayload,
    SkillCalledPayload,
    TaskSwitchedPayload,
)
from agent_factory.utils.constants import (
    DEFAULT_SKILL_MESSAGE,
    SWITCH_SESSION,
    SWITCH_TASK,
    TEST_CHAT_ENDPOINT,
    TEST_SKILL_ENDPOINT,
    USE_SKILL,
)
from agent_factory.utils.env import load_env
from agent_factory.utils.http_client import HttpClient


def _ref_id(ref: Any) -> str:
    """Identifier of a session/task/skill reference (bare id or object)."""
    if isinstance(ref, str):
        return ref
    if isinstance(ref, dict):
        return str(ref.get("id") or "")
    return ""


def _resolve_index(refs: list[Any] | None, index: int, kind: str, container: str) -> str:
    """Resolve a 1-based index into a reference list.

    Raises:
        SelectionError: If the list is empty or the index is out of range
    """
    if not refs:
        raise SelectionError(f"No {kind}s available in {container}")
    if index < 1 or index > len(refs):
        raise SelectionError(
            f"{kind.capitalize()} index {index} is out of range. "
            f"Available {kind}s: 1-{len(refs)}"
        )
    resolved = _ref_id(refs[index - 1])
    if not resolved:
        raise SelectionError(f"{kind.capitalize()} at index {index} not found")
    return resolved


def _resolve_selector(
    selector: str | int, refs: list[Any] | None, kind: str, container: str
) -> str:
    """Resolve an identifier or 1-based index to an identifier."""
    if isinstance(selector, bool):
        raise SelectionError(f"Invalid {kind} selector: {selector!r}")
    if isinstance(selector, int):
        return _resolve_index(refs, selector, kind, container)
    if isinstance(selector, str) and selector:
        return selector
    raise SelectionError(f"Invalid {kind} selector: {selector!r}")


def _coerce_index(value: Any, kind: str) -> int:
    """Turn a function-call argument such as 2 or "2" into an index."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise SelectionError(f"Invalid {kind} index: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SelectionError(f"Invalid {kind} index: {value!r}") from e


class AgentFactoryHandler:
    """Client for the Agent Factory API.

    Holds the selected agent/session/task (the agent state) and the
    conversation history for one conversation, and publishes lifecycle events
    as they change. Operations on one handler must not run concurrently: chat
    and function-call handling read and then write the shared history and
    state without locking.

    Resource CRUD is available through ``agents``, ``tools``, ``skills``,
    ``sessions``, ``tasks``, ``curriculums`` and ``modules``.
    """

    def __init__(
        self,
        api_key: str,
        options: AgentFactoryOptions | None = None,
        http_client: HttpClient | None = None,
    ):
        """Initialize the handler.

        Args:
            api_key: Bearer token for the API
            options: Base URL, timeout, debug and auto-execution settings
            http_client: Pre-built transport; one is created from options if None
        """
        options = options or AgentFactoryOptions()
        self.options = options
        self.logger = logging.getLogger(__name__)

        self.http = http_client or HttpClient(
            base_url=options.base_url,
            api_key=api_key,
            timeout=options.timeout,
            debug=options.debug,
        )
        self.events = EventEmitter()

        self.agents = AgentsClient(self.http)
        self.tools = ToolsClient(self.http)
        self.skills = SkillsClient(self.http)
        self.sessions = SessionsClient(self.http)
        self.tasks = TasksClient(self.http)
        self.curriculums = CurriculumsClient(self.http)
        self.modules = ModulesClient(self.http)

        self.auto_switch_task = options.auto_switch_task
        self.auto_switch_session = options.auto_switch_session
        self.auto_use_skill = options.auto_use_skill

        self._agent_state = AgentState()
        self._conversation_history: list[Message] = []

    @classmethod
    def from_env(
        cls, env_file: str | Path | None = None, **overrides: Any
    ) -> "AgentFactoryHandler":
        """Create a handler configured from environment variables / a .env file.

        Raises:
            ValueError: If AGENT_FACTORY_API_KEY is not set
        """
        load_env(env_file)
        api_key = os.getenv(ENV_VAR_API_KEY)
        if not api_key:
            raise ValueError(
                f"No API key found. Set {ENV_VAR_API_KEY} in the environment or a .env file."
            )
        return cls(api_key, options_from_env(**overrides))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "AgentFactoryHandler":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # Events

    def add_event_listener(self, event: AgentFactoryEvent, handler: Handler) -> Handler:
        return self.events.subscribe(event, handler)

    def add_event_listener_once(
        self, event: AgentFactoryEvent, handler: Handler
    ) -> Handler:
        return self.events.subscribe_once(event, handler)

    def remove_event_listener(self, event: AgentFactoryEvent, handler: Handler) -> None:
        self.events.unsubscribe(event, handler)

    def remove_all_event_listeners(self, event: AgentFactoryEvent | None = None) -> None:
        self.events.clear(event)

    def _emit_event(self, event: AgentFactoryEvent, payload: BaseModel) -> bool:
        expected = EVENT_PAYLOADS[event]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{event.value} expects {expected.__name__}, got {type(payload).__name__}"
            )
        return self.events.publish(event, payload)

    # State management

    def get_agent_state(self) -> AgentState:
        """Return a copy of the current agent state."""
        return self._agent_state.model_copy(deep=True)

    def update_agent_state(self, updates: dict[str, Any] | None = None, **fields: Any) -> None:
        """Merge fields into the agent state and stamp updated_at.

        Raises:
            ValueError: If a field is not part of AgentState
        """
        changes = {**(updates or {}), **fields}
        unknown = sorted(set(changes) - set(AgentState.model_fields))
        if unknown:
            raise ValueError(f"Unknown agent state fields: {', '.join(unknown)}")

        for name, value in changes.items():
            setattr(self._agent_state, name, value)
        self._touch()

    def _touch(self) -> None:
        self._agent_state.updated_at = datetime.now()

    async def _fetch_first_task(self, session_details: dict[str, Any]) -> dict[str, Any] | None:
        tasks = session_details.get("tasks") or []
        if not tasks:
            return None
        return await self.tasks.get(_ref_id(tasks[0])) or {}

    async def initialize_agent_state(self, agent_id: str) -> AgentState:
        """Load an agent and select its first session and that session's first task.

        State is committed only after every fetch succeeded, and replaces any
        previously selected agent, session and task.

        Args:
            agent_id: Agent to bootstrap from

        Returns:
            Copy of the resulting agent state

        Raises:
            InitializationError: If any fetch failed
        """
        try:
            agent_details = await self.agents.get_details(agent_id)
            if not isinstance(agent_details, dict):
                raise AgentFactoryError(f"Unexpected agent details payload for {agent_id}")

            session_id = ""
            session_details: dict[str, Any] | None = None
            task_details: dict[str, Any] | None = None
            sessions = agent_details.get("sessions") or []
            if sessions:
                session_id = _ref_id(sessions[0])
                session_details = await self.sessions.get(session_id) or {}
                task_details = await self._fetch_first_task(session_details)
        except AgentFactoryError as e:
            self.logger.error(f"Failed to initialize agent state for {agent_id}: {e}")
            self._emit_event(
                AgentFactoryEvent.AGENT_STATE_INITIALIZED_ERROR,
                AgentStateInitializedErrorPayload(error=e, agent_id=agent_id),
            )
            raise InitializationError(
                agent_id, f"Failed to initialize agent {agent_id}: {e}"
            ) from e

        state = self._agent_state
        state.agent_id = agent_id
        state.agent_details = {**AgentState().agent_details, **agent_details}
        state.session_id = ""
        state.session_details = {}
        state.task_id = ""
        state.task_details = {}
        if session_details is not None:
            state.session_id = str(session_details.get("id") or session_id)
            state.session_details = session_details
            if task_details is not None:
                state.task_id = str(task_details.get("id") or _ref_id(session_details["tasks"][0]))
                state.task_details = task_details
        self._touch()

        self.logger.info(
            f"Initialized agent {agent_id} (session={state.session_id or '-'}, "
            f"task={state.task_id or '-'})"
        )
        self._emit_event(
            AgentFactoryEvent.AGENT_STATE_INITIALIZED,
            AgentStateInitializedPayload(agent_state=state),
        )
        return self.get_agent_state()

    async def change_session(self, selector: str | int) -> None:
        """Select a session by id or by 1-based index into the agent's sessions.

        If the new session has tasks its first task becomes current; a session
        without tasks leaves the current task untouched.

        Raises:
            SelectionError: If the index cannot be resolved (no request is sent)
        """
        state = self._agent_state
        old_session_id = state.session_id
        try:
            session_id = _resolve_selector(
                selector, state.agent_details.get("sessions"), "session", "agent state"
            )
            self.logger.debug(f"Changing session to {session_id}")

            session_details = await self.sessions.get(session_id) or {}
            task_details = await self._fetch_first_task(session_details)
        except AgentFactoryError as e:
            self.logger.error(f"Failed to change session to {selector!r}: {e}")
            raise

        state.session_id = session_id
        state.session_details = session_details
        if task_details is not None:
            state.task_id = str(task_details.get("id") or _ref_id(session_details["tasks"][0]))
            state.task_details = task_details
        self._touch()

        self._emit_event(
            AgentFactoryEvent.SESSION_SWITCHED,
            SessionSwitchedPayload(
                old_session_id=old_session_id or None,
                new_session_id=session_id,
                agent_state=state,
            ),
        )

    async def change_task(self, selector: str | int) -> None:
        """Select a task by id or by 1-based index into the session's tasks.

        Raises:
            SelectionError: If the index cannot be resolved (no request is sent)
        """
        state = self._agent_state
        old_task_id = state.task_id
        try:
            task_id = _resolve_selector(
                selector, state.session_details.get("tasks"), "task", "current session"
            )
            self.logger.debug(f"Changing task to {task_id}")

            task_details = await self.tasks.get(task_id) or {}
        except AgentFactoryError as e:
            self.logger.error(f"Failed to change task to {selector!r}: {e}")
            raise

        state.task_id = task_id
        state.task_details = task_details
        self._touch()

        self._emit_event(
            AgentFactoryEvent.TASK_SWITCHED,
            TaskSwitchedPayload(
                old_task_id=old_task_id or None, new_task_id=task_id, agent_state=state
            ),
        )

    # Conversation

    async def test_chat(self, message: str, history: list[Message] | None = None) -> Any:
        """Send a message to the agent under its current state.

        The user message joins the conversation history only once the request
        succeeded. If the server answers with a function call, the result of
        handling it is returned instead of the chat response.

        Args:
            message: User text
            history: History to send; defaults to the handler's own history

        Returns:
            ChatResponse, or the function call outcome (see approve_function_call)
            / PendingFunctionCall when the call needs manual approval

        Raises:
            TransportError: If the request failed
            ResponseFormatError: If a 2xx response could not be parsed
        """
        return await self._send_chat(TEST_CHAT_ENDPOINT, message, history, context="test_chat")

    async def test_skill(
        self, message: str, skill_index: int, history: list[Message] | None = None
    ) -> Any:
        """Send a message to one skill of the current task.

        Args:
            message: User text
            skill_index: 1-based position in the current task's skills
            history: History to send; defaults to the handler's own history

        Raises:
            SelectionError: If no task is selected or the skill index is out of
                range (no request is sent)
            TransportError: If the request failed
            ResponseFormatError: If a 2xx response could not be parsed
        """
        task_details = self._agent_state.task_details
        if not task_details:
            raise SelectionError("No task selected; cannot resolve a skill")
        skill_id = _resolve_index(
            task_details.get("skills"), _coerce_index(skill_index, "skill"), "skill", "current task"
        )

        self._emit_event(
            AgentFactoryEvent.SKILL_CALLED,
            SkillCalledPayload(skill_id=skill_id, message=message, agent_state=self._agent_state),
        )
        return await self._send_chat(
            TEST_SKILL_ENDPOINT,
            message,
            history,
            extra={"skillId": skill_id},
            context="test_skill",
        )

    async def _send_chat(
        self,
        endpoint: str,
        message: str,
        history: list[Message] | None,
        extra: dict[str, Any] | None = None,
        context: str = "chat",
    ) -> Any:
        user_message = Message.user(message)
        base_history = self._conversation_history if history is None else history
        request_history = [*base_history, user_message]

        self._emit_event(
            AgentFactoryEvent.MESSAGE_SENT,
            MessageSentPayload(message=message, agent_state=self._agent_state),
        )

        body = {
            "message": message,
            **(extra or {}),
            "history": [entry.to_wire() for entry in request_history],
            "agentState": self._agent_state.to_wire(),
        }
        try:
            raw = await self.http.post(endpoint, body)
            try:
                response = ChatResponse.model_validate(raw or {})
            except ValidationError as e:
                raise ResponseFormatError(
                    f"Malformed {endpoint} response: {e.error_count()} validation error(s)",
                    body=raw,
                ) from e
        except AgentFactoryError as e:
            self.logger.error(f"Error in {context}: {e}")
            raise

        self._conversation_history.append(user_message)

        if response.action is not None:
            return await self._handle_function_call(response.action)

        reply = response.message or response.model_dump_json(by_alias=True, exclude_none=True)
        self._conversation_history.append(Message.model(reply))

        self._emit_event(
            AgentFactoryEvent.MESSAGE_RECEIVED,
            MessageReceivedPayload(
                message=response.message or "",
                response=response,
                agent_state=self._agent_state,
            ),
        )
        self._publish_history()
        return response

    async def send_follow_up_message(self, message: str) -> Any:
        """Continue the conversation, e.g. after executing a function call."""
        return await self.test_chat(message)

    def get_conversation_history(self) -> list[Message]:
        """Return a copy of the conversation history."""
        return [entry.model_copy(deep=True) for entry in self._conversation_history]

    def get_conversation_history_raw(self) -> list[Message]:
        """Return the live history list; mutations affect the handler."""
        return self._conversation_history

    def clear_conversation_history(self) -> None:
        self._conversation_history = []
        self._publish_history()

    def add_message_to_history(self, message: Message | dict[str, Any]) -> None:
        if not isinstance(message, Message):
            message = Message.model_validate(message)
        self._conversation_history.append(message)
        self._publish_history()

    def _publish_history(self) -> None:
        self._emit_event(
            AgentFactoryEvent.CONVERSATION_HISTORY_UPDATED,
            ConversationHistoryUpdatedPayload(
                history=list(self._conversation_history), agent_state=self._agent_state
            ),
        )

    # Function calls

    def _auto_execute(self, name: str) -> bool | None:
        """Auto-execution flag for a function call; None if the name is unknown."""
        return {
            SWITCH_TASK: self.auto_switch_task,
            SWITCH_SESSION: self.auto_switch_session,
            USE_SKILL: self.auto_use_skill,
        }.get(name)

    async def _handle_function_call(self, function_call: FunctionCall) -> Any:
        self._emit_event(
            AgentFactoryEvent.FUNCTION_CALL_RECEIVED,
            FunctionCallReceivedPayload(
                function_call=function_call, agent_state=self._agent_state
            ),
        )

        auto_execute = self._auto_execute(function_call.name)
        if auto_execute is None:
            self.logger.error(f"Received unknown function call: {function_call.name}")
            raise UnknownFunctionCallError(function_call.name)

        if auto_execute:
            return await self.approve_function_call(function_call)
        return PendingFunctionCall(function_call=function_call)

    async def approve_function_call(self, function_call: FunctionCall | dict[str, Any]) -> Any:
        """Execute a function call.

        Returns:
            switchTask: the follow-up chat result; switchSession and useSkill:
            a FunctionCallResult

        Raises:
            MissingArgumentError: If a required argument is absent
            UnknownFunctionCallError: If the name is not recognized
        """
        if not isinstance(function_call, FunctionCall):
            function_call = FunctionCall.model_validate(function_call)

        self._emit_event(
            AgentFactoryEvent.FUNCTION_CALL_APPROVED,
            FunctionCallApprovedPayload(function_call=function_call, agent_state=self._agent_state),
        )

        executors: dict[str, Callable[[dict[str, Any]], Awaitable[Any]]] = {
            SWITCH_TASK: self._execute_switch_task,
            SWITCH_SESSION: self._execute_switch_session,
            USE_SKILL: self._execute_use_skill,
        }
        try:
            executor = executors.get(function_call.name)
            if executor is None:
                raise UnknownFunctionCallError(function_call.name)
            result = await executor(function_call.args)
        except AgentFactoryError as e:
            self.logger.error(f"Error executing function call {function_call.name}: {e}")
            raise

        self._emit_event(
            AgentFactoryEvent.FUNCTION_CALL_EXECUTED,
            FunctionCallExecutedPayload(
                function_call=function_call, result=result, agent_state=self._agent_state
            ),
        )
        return result

    def decline_function_call(self, function_call: FunctionCall | dict[str, Any]) -> None:
        """Reject a function call and mark matching history entries DECLINED."""
        if not isinstance(function_call, FunctionCall):
            function_call = FunctionCall.model_validate(function_call)

        self._emit_event(
            AgentFactoryEvent.FUNCTION_CALL_DECLINED,
            FunctionCallDeclinedPayload(function_call=function_call, agent_state=self._agent_state),
        )

        for entry in self._conversation_history:
            if entry.has_function_call(function_call.name):
                entry.meta.function_call_status = FunctionCallStatus.DECLINED

    async def _execute_switch_task(self, args: dict[str, Any]) -> Any:
        task_id = args.get("task_id")
        if task_id is None:
            raise MissingArgumentError(SWITCH_TASK, "task_id")

        await self.change_task(task_id)
        display_name = self._agent_state.task_details.get("display_name") or task_id
        return await self.send_follow_up_message(f"Switched to task {display_name}")

    async def _execute_switch_session(self, args: dict[str, Any]) -> FunctionCallResult:
        session_index = args.get("sessionIndex")
        session_id = args.get("sessionId")

        if session_index is not None:
            index = _coerce_index(session_index, "session")
            await self.change_session(index)
            return FunctionCallResult(success=True, message=f"Switched to session at index {index}")
        if session_id is not None:
            await self.change_session(str(session_id))
            return FunctionCallResult(success=True, message=f"Switched to session {session_id}")

        raise MissingArgumentError(SWITCH_SESSION, "sessionIndex or sessionId")

    async def _execute_use_skill(self, args: dict[str, Any]) -> FunctionCallResult:
        skill_name = args.get("skillName")
        if skill_name is None:
            raise MissingArgumentError(USE_SKILL, "skillName")

        index = _coerce_index(skill_name, "skill")
        result = await self.test_skill(args.get("message") or DEFAULT_SKILL_MESSAGE, index)
        return FunctionCallResult(success=True, message=f"Used skill {skill_name}", result=result)

    # Authentication

    def set_api_key(self, api_key: str) -> None:
        self.http.set_auth_token(api_key)

    def remove_api_key(self) -> None:
        self.http.remove_auth_token()
