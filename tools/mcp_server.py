# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server for the Pharos GraphQL API
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the single MCP tool, pharos_graphql_query.  The tool is a thin
#   wrapper around core/pharos.py: it logs the call, runs the query, and
#   packs the result into one pretty-printed JSON text block.
#
# HOW IT WORKS (the flow):
#   1. The assistant calls "pharos_graphql_query" via MCP
#   2. FastMCP validates the arguments against the type hints below
#   3. run_query() POSTs the query to Pharos and normalizes the outcome
#   4. The result (data or errors) goes back as a single TextContent
#
#   The tool never raises.  HTTP errors, non-JSON bodies and network
#   failures all arrive as a GraphQL-style {"errors": [...]} object.
#
# RUNNING THIS SERVER:
#   a) Over SSE (HTTP):   python main.py
#   b) Over stdio:        python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Optional

from fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

from core.pharos import QUERY_PREVIEW_CHARS, VARIABLES_PREVIEW_CHARS, run_query
from core.settings import load_settings

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: over the stdio transport, STDOUT carries the MCP JSON
# messages and any stray log line would corrupt them.
#
# Colors:  CYAN = incoming call,  YELLOW = status,  GREEN = response
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


def preview_query(query: str) -> str:
    return f"{query[:QUERY_PREVIEW_CHARS]}..."


def preview_variables(variables: dict[str, Any]) -> str:
    return f"{json.dumps(variables)[:VARIABLES_PREVIEW_CHARS]}..."


def format_result(result: Any) -> str:
    """Pretty-print a result for the assistant (and for humans reading logs)."""
    return json.dumps(result, indent=2)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
SERVER_NAME = "PharosExplorer"
SERVER_VERSION = "0.1.0"
SERVER_INSTRUCTIONS = (
    "MCP Server for querying the Pharos GraphQL API. Pharos is an integrated "
    "knowledge base for illumination of the Druggable Genome, providing "
    "information on targets (proteins), diseases, and ligands (small molecules/drugs)."
)

mcp = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=SERVER_VERSION)
logging.info("Pharos MCP Server initialized.")


# =============================================================================
# TOOL: pharos_graphql_query
# =============================================================================
# The description is what the assistant reads to decide how to call the
# tool, so it carries working example queries for each entity type plus an
# introspection query for schema discovery.
# =============================================================================
TOOL_NAME = "pharos_graphql_query"
TOOL_DESCRIPTION = (
    "Executes a GraphQL query against the Pharos API (https://pharos-api.ncats.io/graphql). "
    "Pharos provides comprehensive information on biological targets (proteins), diseases, "
    "and ligands (small molecules/drugs). "
    "Query for specific entities and their relationships. "
    "For example, to find information about a target by UniProt ID: "
    "'{ target(q: { uniprot: \"P05067\" }) { name tdl description pathways { name type } } }'. "
    "To find information about a disease: "
    "'{ disease(name: \"Alzheimer Disease\") { name description targets(top: 3) { name preferredSymbol tdl } } }'. "
    "To find information about a ligand (e.g., by ChEMBL ID, which can be used as ligid): "
    "'{ ligand(ligid: \"CHEMBL12\") { name smiles isdrug activities(all: true, top: 2) { type value target { name } } } }'. "
    "Use GraphQL introspection for schema discovery: "
    "'{ __schema { queryType { name } types { name kind description fields { name args { name type { name ofType { name } } } } } } }'. "
    "If a query fails, check the syntax and retry with introspection."
)


@mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
def pharos_graphql_query(
    query: Annotated[str, Field(description=(
        "The GraphQL query string to execute against the Pharos GraphQL API. "
        "Example: '{ target(q: { uniprot: \"P05067\" }) { name tdl } }'. "
        "Use introspection queries like '{ __schema { queryType { name } types { name kind } } }' "
        "to discover the schema."
    ))],
    variables: Annotated[Optional[dict[str, Any]], Field(description=(
        "Optional dictionary of variables for the GraphQL query. "
        "Example: { \"uniprotId\": \"P05067\" }"
    ))] = None,
) -> TextContent:
    """Run a GraphQL query against Pharos and return the JSON result as text."""
    _log_request(TOOL_NAME, query=preview_query(query))
    if variables is not None:
        _log_status(f"With variables: {preview_variables(variables)}")

    result = _log_response(TOOL_NAME, run_query(query, variables))
    return TextContent(type="text", text=format_result(result))


# =============================================================================
# Server entry point
# =============================================================================
# python -m tools.mcp_server runs the server over stdio, for MCP clients that
# spawn it as a subprocess.  main.py serves the same instance over SSE.
# =============================================================================
if __name__ == "__main__":
    # Fail at startup on bad PHAROS_* values, as main.py does
    load_settings()
    mcp.run()
