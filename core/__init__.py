# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the Pharos query logic: request construction, the
# HTTP call, outcome classification, and error normalization.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Starlette, or uvicorn.  Every
#   module here is plain Python plus the standard library, so it can be
#   imported and tested without an MCP runtime.
#
#   tools/ wraps these functions as MCP tools; core/ never knows it is
#   being called by an AI assistant.
# =============================================================================
