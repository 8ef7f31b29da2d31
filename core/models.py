# =============================================================================
# core/models.py  —  Data Models for a single Pharos query
# =============================================================================
#
# These dataclasses describe every piece of data that flows through one
# tool invocation.  All of them are request-scoped: they are created when a
# query arrives and dropped once the response envelope has been returned.
#
# THE OUTCOME UNION:
#   A query ends in exactly one of four outcomes:
#
#     Success           → the upstream answered 2xx with a JSON body
#     GraphQLHttpError  → the upstream answered non-2xx with a JSON body
#     NonJsonResponse   → the upstream answered, but the body is not JSON
#     TransportFailure  → the call never completed (DNS, refused, timeout...)
#
#   UpstreamOutcome is the closed union of these four.  Serialization in
#   core/pharos.py dispatches over all of them explicitly.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Any JSON-compatible value: None, bool, int, float, str, list or dict.
JsonValue = Any


# -----------------------------------------------------------------------------
# Invocation — the tool call as received from the MCP layer
# -----------------------------------------------------------------------------
@dataclass
class Invocation:
    """A GraphQL query plus its optional variables.

    The query is forwarded as-is.  Whether it is valid GraphQL is decided
    by the Pharos API, never locally.
    """

    query: str
    variables: Optional[dict[str, JsonValue]] = None


# -----------------------------------------------------------------------------
# UpstreamRequest — the HTTP request derived from an Invocation
# -----------------------------------------------------------------------------
@dataclass
class UpstreamRequest:
    """Everything needed to POST one query to the GraphQL endpoint."""

    endpoint: str
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, JsonValue] = field(default_factory=dict)
    method: str = "POST"


# -----------------------------------------------------------------------------
# The four outcome variants
# -----------------------------------------------------------------------------
@dataclass
class Success:
    """2xx response with a JSON body, carried verbatim.

    The payload may itself hold a GraphQL ``errors`` array next to (or
    instead of) ``data``.  That is still a Success: the caller inspects it.
    """

    payload: JsonValue


@dataclass
class GraphQLHttpError:
    """Non-2xx response whose body parsed as JSON."""

    status_code: int
    body: JsonValue


@dataclass
class NonJsonResponse:
    """Response whose body could not be parsed as JSON, at any status."""

    status_code: int
    raw_text: str                      # already truncated for the caller


@dataclass
class TransportFailure:
    """The HTTP call could not be completed."""

    message: str
    client_error: bool = True


UpstreamOutcome = Union[Success, GraphQLHttpError, NonJsonResponse, TransportFailure]
