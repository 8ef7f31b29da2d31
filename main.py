# =============================================================================
# main.py  —  Entry Point for the Pharos MCP Server (SSE transport)
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (optional)
#   2. Resolves settings: Pharos endpoint, timeout, bind host/port
#   3. Builds the ASGI app: FastMCP's SSE transport on /sse, 404 elsewhere
#   4. Serves it with uvicorn
#
# CONNECTING A CLIENT:
#   Point any MCP client with SSE support at http://<MCP_HOST>:<MCP_PORT>/sse
#   For stdio clients, run `python -m tools.mcp_server` instead.
# =============================================================================

import logging

from dotenv import load_dotenv

# Must run before settings are read: MCP_HOST, MCP_PORT and the PHAROS_*
# variables may come from .env.
load_dotenv()

import uvicorn

from core.settings import load_settings
from tools.mcp_server import mcp
from tools.sse_app import SSE_PATH, create_app


def run_server() -> None:
    """Start the SSE server and block until it is stopped."""
    settings = load_settings()
    app = create_app(mcp)

    logging.info(
        f"Pharos MCP Server listening on http://{settings.host}:{settings.port}{SSE_PATH} "
        f"(upstream: {settings.endpoint}, timeout: {settings.timeout_seconds}s)"
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run_server()
