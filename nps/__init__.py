# =============================================================================
# nps/__init__.py
# =============================================================================
# This package contains everything that talks to, or reshapes data from, the
# National Park Service API.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other MCP runtime.  The
#   gateway (client.py) only needs httpx, and the formatters are plain
#   functions over dicts, so both can be exercised from a bare REPL or a
#   unit test with a stubbed HTTP layer.
# =============================================================================
