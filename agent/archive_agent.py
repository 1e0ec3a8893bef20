# =============================================================================
# agent/archive_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the ADK agent that answers questions about the archive.  The
#   agent uses:
#     - a LiteLlm model (any provider LiteLLM supports; OpenRouter default)
#     - the system prompt from agent/prompt.py
#     - an MCPToolset that starts tools/mcp_server.py as a stdio subprocess
#
#   ┌─────────────────────┐   stdio (MCP)   ┌──────────────────────────┐
#   │  ADK Agent          │ ──────────────▶ │  tools/mcp_server.py     │
#   │  prompt + LiteLlm   │ ◀────────────── │  search_posts_by_date_…  │
#   └─────────────────────┘                 │  list_podcast            │
#                                           │  get_youtube_transcript  │
#                                           └──────────────────────────┘
#
# MODEL:
#   AGENT_MODEL selects the LiteLLM model string, e.g.
#     "openrouter/openai/gpt-4o" (default)
#     "openrouter/anthropic/claude-3.5-sonnet"
#   LiteLLM reads the provider key (OPENROUTER_API_KEY, ...) from the
#   environment.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_archive_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def create_agent() -> Agent:
    """Create the archive research agent wired to the MCP tool server.

    The tool server runs with this interpreter, from the project root, as
    `python -m tools.mcp_server`, so it sees the same installed packages
    and the same .env file.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command=sys.executable,
            args=["-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    agent = Agent(
        name="content_archive_researcher",
        model=LiteLlm(model=os.environ.get("AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_archive_prompt(),
        tools=[mcp_tools],
    )

    return agent
