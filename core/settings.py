# =============================================================================
# core/settings.py  —  Runtime configuration from environment variables
# =============================================================================
#
# Every setting has a default, so the server runs with no configuration at
# all.  main.py loads a .env file (python-dotenv) before anything reads
# these values.
#
#   PHAROS_GRAPHQL_ENDPOINT   Upstream GraphQL URL
#   PHAROS_TIMEOUT_SECONDS    Per-request timeout, seconds (float > 0)
#   MCP_HOST / MCP_PORT       Bind address for the SSE server
#
# Settings are read on every call rather than cached at import time, so a
# changed environment takes effect for the next query.
# =============================================================================

import os
from dataclasses import dataclass

DEFAULT_ENDPOINT = "https://pharos-api.ncats.io/graphql"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass(frozen=True)
class PharosSettings:
    """Resolved configuration for one process or one query."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _read_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {raw!r}")
    return value


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> PharosSettings:
    """Build a PharosSettings from the current environment.

    Raises:
        ValueError: if a numeric variable is set but cannot be parsed.
    """
    return PharosSettings(
        endpoint=os.environ.get("PHAROS_GRAPHQL_ENDPOINT", "").strip() or DEFAULT_ENDPOINT,
        timeout_seconds=_read_float("PHAROS_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        host=os.environ.get("MCP_HOST", "").strip() or DEFAULT_HOST,
        port=_read_int("MCP_PORT", DEFAULT_PORT),
    )
