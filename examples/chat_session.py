import asyncio
import logging
import sys
import time

from agent_factory import AgentFactoryEvent, AgentFactoryHandler, PendingFunctionCall


def print_event(payload):
    print(f"  [{type(payload).__name__}]")


async def main(agent_id: str):
    # Reads AGENT_FACTORY_API_KEY (and optional base URL / timeout) from .env
    async with AgentFactoryHandler.from_env(auto_switch_task=False) as handler:
        for event in AgentFactoryEvent:
            handler.add_event_listener(event, print_event)

        state = await handler.initialize_agent_state(agent_id)
        print(f"Agent {state.agent_id}: session={state.session_id} task={state.task_id}")

        while True:
            text = input("> ").strip()
            if not text:
                break

            result = await handler.test_chat(text)
            if isinstance(result, PendingFunctionCall):
                call = result.function_call
                answer = input(f"Run {call.name}({call.args})? [y/N] ").strip().lower()
                if answer == "y":
                    result = await handler.approve_function_call(call)
                else:
                    handler.decline_function_call(call)
                    continue

            print(getattr(result, "message", result))

        return handler.get_conversation_history()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python examples/chat_session.py AGENT_ID")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)
    start = time.perf_counter()
    history = asyncio.run(main(sys.argv[1]))
    end = time.perf_counter()

    print(f"{len(history)} messages in", f"{end - start:.1f} seconds")
