# =============================================================================
# agent/__init__.py
# =============================================================================
# Google ADK research agent that answers questions about the archive by
# calling the MCP tools in tools/mcp_server.py.
#
#   prompt.py         — system prompt (today's date injected at build time)
#   archive_agent.py  — Agent + MCPToolset wiring (stdio subprocess)
#
# The agent holds no data-access logic; everything it knows comes back
# from tool calls.
# =============================================================================
