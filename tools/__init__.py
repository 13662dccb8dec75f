# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the MCP-facing side of the server.
#
#   contracts.py   → tool names, argument schemas, validation, dispatch and
#                    the error envelopes every failure is turned into
#   mcp_server.py  → the FastMCP binding (stdio transport, logging)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP themselves (that's nps/client.py)
#   - They do NOT reshape NPS records (that's nps/formatters.py)
#
# Each tool has a camelCase name the agent already knows (findParks,
# getParkDetails, getAlerts), a one-line description, and an inputSchema
# generated from the same pydantic model that validates the arguments.
# =============================================================================
