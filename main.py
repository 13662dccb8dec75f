# =============================================================================
# main.py : Entry point for the National Parks MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py            (or the `nationalparks-mcp` script)
#
# WHAT HAPPENS:
#   1. Loads .env (NPS_API_KEY) into the environment
#   2. Sends all logging to STDERR (STDOUT carries the MCP protocol)
#   3. Builds the FastMCP server (tools/mcp_server.py) and runs it on stdio
#      until the client disconnects
#
# EXIT CODES:
#   0 → clean shutdown (client closed the pipe, or Ctrl-C)
#   1 → the server could not be started; the cause is logged first
# =============================================================================

import logging
import os
import sys

from dotenv import load_dotenv

# Must run before NPSConfig.from_env() reads NPS_API_KEY.
load_dotenv()

from tools.mcp_server import build_server


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [MCP] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main() -> None:
    configure_logging()
    try:
        server = build_server()
        logging.info("National Parks MCP Server running on stdio")
        server.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    except Exception:
        logging.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    main()
