# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains an example Google ADK agent that uses the Apollo
# tool server.  It is a host for the tools, not part of them: the server in
# tools/ works with any MCP client.
#
# The agent decides WHICH tools to call and in what order (search first,
# then match); core/ does the Apollo work; tools/ exposes it over MCP.
# =============================================================================
