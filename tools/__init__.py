# =============================================================================
# tools/__init__.py
# =============================================================================
# This package exposes the Pharos query logic over MCP.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and core/:
#     - mcp_server.py declares the FastMCP server and its one tool,
#       pharos_graphql_query, and formats results as text
#     - sse_app.py routes HTTP traffic: /sse goes to the SSE transport,
#       every other path gets a plain-text 404
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests to Pharos (that's core/pharos.py)
#   - They do NOT interpret GraphQL results; data and errors pass through
# =============================================================================
