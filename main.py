# =============================================================================
# main.py  -  Interactive prospecting session
# =============================================================================
#
# USAGE:
#     uv run python main.py
#
# REQUIRES (in .env or the environment):
#     APOLLO_API_KEY        passed through to the MCP tool server
#     OPENROUTER_API_KEY    (or the key for whatever AGENT_MODEL names)
#
# Type a question ("Find VPs of Sales at fintech companies in Austin"), watch
# the tool calls scroll by, and read the agent's answer.  quit/exit/q or
# Ctrl-D ends the session.
# =============================================================================

import asyncio

from dotenv import load_dotenv

load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.prospecting_agent import create_agent

APP_NAME = "apollo_prospecting"
USER_ID = "demo_user"


async def run_agent():
    """Run the prospecting agent in a read-eval-print loop."""
    print("=" * 70)
    print("  APOLLO PROSPECTING ASSISTANT")
    print("  Powered by Google ADK + LiteLLM + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # InMemorySessionService keeps the conversation history for this run only
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent ready!\n")
    print("💬 Ask about companies, people, contacts or sent emails.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is working...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if part.text:
                        final_response = part.text
                    if part.function_call:
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. Check the tool server log above.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
