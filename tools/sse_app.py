# =============================================================================
# tools/sse_app.py  —  HTTP routing for the SSE transport
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the ASGI app that main.py serves with uvicorn.  Exactly one path
#   is functional:
#
#     /sse               → SSE event stream (FastMCP)
#     /sse/messages/     → client → server MCP messages (FastMCP)
#     anything else      → fixed plain-text 404 naming /sse
#
#   Lifespan events always go to the FastMCP app so its session manager
#   starts and stops with the server.
# =============================================================================

import logging

from fastmcp import FastMCP
from fastmcp.server.http import create_sse_app
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

SSE_PATH = "/sse"
MESSAGE_PATH = "/sse/messages/"

NOT_FOUND_BODY = (
    "Pharos MCP Server - Path not found.\n"
    "Available MCP paths:\n"
    "- /sse (for Server-Sent Events transport)"
)


def is_sse_path(path: str) -> bool:
    return path == SSE_PATH or path.startswith(SSE_PATH + "/")


def create_app(server: FastMCP) -> ASGIApp:
    """Wrap a FastMCP server's SSE app with the /sse-only routing."""
    sse_app = create_sse_app(server=server, message_path=MESSAGE_PATH, sse_path=SSE_PATH)

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan" or is_sse_path(scope.get("path", "")):
            await sse_app(scope, receive, send)
            return

        if scope["type"] == "http":
            logger.warning(
                f"Pharos MCP Server. Requested path {scope['path']} not found. "
                f"Listening for SSE on {SSE_PATH}."
            )
            response = PlainTextResponse(NOT_FOUND_BODY, status_code=404)
            await response(scope, receive, send)
            return

        # Websockets and other scope types are not served
        await sse_app(scope, receive, send)

    return app
