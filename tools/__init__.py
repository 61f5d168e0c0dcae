# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ translates between MCP and core/.  For each capability it:
#     1. Declares typed, bounded parameters (the schema the agent sees)
#     2. Validates them into a core/params.py model
#     3. Calls the core/ adapter with a per-call ApolloClient
#     4. Serializes the result dataclass to a dict, dropping empty fields
#     5. Turns every failure into a ToolError the agent can read
#
# The docstrings on each tool are part of the contract: the LLM reads them
# to decide WHEN to call the tool and what it will get back.
# =============================================================================
