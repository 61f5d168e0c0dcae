# =============================================================================
# agent/prospecting_agent.py  -  Google ADK agent wired to the Apollo tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the example agent that drives the MCP tool server.  The agent
#   has no Apollo logic of its own; it has:
#     - a system prompt (agent/prompt.py)
#     - one MCP connection (tools/mcp_server.py, spawned over stdio)
#     - a model (AGENT_MODEL, OpenRouter GPT-4o by default, via LiteLlm)
#
#   ┌──────────────┐   stdio / MCP   ┌───────────────────┐   HTTPS   ┌────────┐
#   │  ADK Agent   │ ──────────────▶ │ tools/mcp_server  │ ────────▶ │ Apollo │
#   │  (LiteLlm)   │ ◀────────────── │  (FastMCP)        │ ◀──────── │  API   │
#   └──────────────┘                 └───────────────────┘           └────────┘
#
# THE SUBPROCESS:
#   "uv run" makes the server use the project's virtual environment.  It is
#   started as a module from the project root so the core/ and tools/
#   packages resolve.  Only the variables the server needs are forwarded.
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_prospecting_prompt
from core.config import get_settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_FORWARDED_VARIABLES = ("LOG_LEVEL", "PATH", "HOME")


def _server_environment() -> dict[str, str]:
    """Environment for the tool server subprocess: APOLLO_* plus a few basics."""
    return {
        name: value
        for name, value in os.environ.items()
        if name.startswith("APOLLO_") or name in _FORWARDED_VARIABLES
    }


def create_agent() -> Agent:
    """Create the Apollo prospecting agent.

    The model comes from AGENT_MODEL (any LiteLLM model string).  LiteLLM
    reads the provider key, e.g. OPENROUTER_API_KEY, from the environment.

    Raises:
        ConfigError: If APOLLO_API_KEY is missing; the tool server would
                     refuse to start without it.
    """
    apollo_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "tools.mcp_server"],
            cwd=PROJECT_ROOT,
            env=_server_environment(),
        ),
    )

    return Agent(
        name="apollo_prospecting_assistant",
        model=LiteLlm(model=get_settings().agent_model),
        instruction=get_prospecting_prompt(),
        tools=[apollo_tools],
    )
