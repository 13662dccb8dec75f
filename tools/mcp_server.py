# =============================================================================
# tools/mcp_server.py : FastMCP Tool Server (stdio transport)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds the three tool contracts from tools/contracts.py to a FastMCP
#   server.  It owns no NPS logic of its own: each call is logged, handed to
#   contracts.call_tool(), and the resulting payload (or error envelope) is
#   returned as ONE text block of pretty-printed JSON.
#
# HOW IT WORKS (the flow):
#   1. The agent lists tools → FastMCP returns the fixed descriptors built
#      from contracts.TOOL_DEFINITIONS (same names, order and schemas every
#      time)
#   2. The agent calls a tool by name, e.g. "findParks"
#   3. NPSTool.run() passes the raw arguments to contracts.call_tool(), which
#      validates them, calls the NPS gateway and formats the response
#   4. The payload is serialized with contracts.render() and returned
#
#   NPSTool subclasses fastmcp's Tool instead of using the @mcp.tool()
#   decorator so the published inputSchema is exactly the contract's, and so
#   schema violations come back as a "Validation error" payload rather than
#   a protocol-level tool error.  Unknown tool names are intercepted by
#   UnknownToolMiddleware for the same reason.
#
# RUNNING THIS SERVER:
#     a) python main.py              (loads .env, configures logging)
#     b) python -m tools.mcp_server
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from nps.config import NPSConfig
from tools.contracts import TOOL_DEFINITIONS, TOOLS_BY_NAME, call_tool, render

SERVER_NAME = "nationalparks-mcp-server"
VERSION = "1.0.0"

# =============================================================================
# Logging helpers
# =============================================================================
# stdout carries the MCP protocol, so everything goes to the root logger,
# which main.py points at STDERR.
#
#   CYAN   → incoming tool call with its arguments
#   YELLOW → intermediate status lines
#   GREEN  → response JSON (compact)
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger(__name__)


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Log the tool payload as compact JSON in GREEN, then return it."""
    compact = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    logger.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return payload


def _text_result(payload: dict[str, Any]) -> ToolResult:
    return ToolResult(content=[TextContent(type="text", text=render(payload))])


async def _invoke(name: str, arguments: dict[str, Any] | None, config: NPSConfig) -> ToolResult:
    _log_request(name, arguments or {})
    payload = await call_tool(name, arguments, config)
    if "error" in payload:
        _log_status(f"{name} returned error: {payload['error']}")
    return _text_result(_log_response(name, payload))


# =============================================================================
# Tool + middleware
# =============================================================================
class NPSTool(Tool):
    """A tool whose schema and behaviour come from a contracts.ToolDefinition."""

    config: NPSConfig = Field(exclude=True)

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return await _invoke(self.name, arguments, self.config)


class UnknownToolMiddleware(Middleware):
    """Answer calls to unregistered tool names with an error payload."""

    def __init__(self, config: NPSConfig) -> None:
        self.config = config

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if name not in TOOLS_BY_NAME:
            return await _invoke(name, context.message.arguments, self.config)
        return await call_next(context)


def build_server(config: NPSConfig | None = None) -> FastMCP:
    """Create the FastMCP server with the three NPS tools registered in order."""
    config = config or NPSConfig.from_env()
    server = FastMCP(SERVER_NAME, version=VERSION)
    for definition in TOOL_DEFINITIONS:
        server.add_tool(
            NPSTool(
                name=definition.name,
                description=definition.description,
                parameters=definition.input_schema,
                config=config,
            )
        )
    server.add_middleware(UnknownToolMiddleware(config))
    return server


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from main import main

    main()
