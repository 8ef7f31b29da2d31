# =============================================================================
# core/pharos.py  —  Pharos GraphQL Query Executor
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE GraphQL query to the Pharos API and turns whatever happens into
#   ONE uniform JSON-able dict.  Pharos (https://pharos.nih.gov) is the NCATS
#   knowledge base for the Druggable Genome: targets (proteins), diseases and
#   ligands (small molecules / drugs).
#
# HOW IT WORKS (the flow):
#   1. build_request()      Invocation → UpstreamRequest
#   2. execute_query()      POST it with urllib and classify the result
#                           into exactly one UpstreamOutcome variant
#   3. outcome_to_response() UpstreamOutcome → {data?, errors?} dict
#
#   run_query() chains all three for the tools/ layer.
#
# CLASSIFICATION ORDER:
#   call failed?            → TransportFailure
#   body not JSON?          → NonJsonResponse   (checked before the status)
#   status outside 2xx?     → GraphQLHttpError
#   otherwise               → Success, body passed through untouched
#
#   No retries happen here.  Retrying or reformulating a query is the
#   calling assistant's decision.
# =============================================================================

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Optional

from core.models import (
    GraphQLHttpError,
    Invocation,
    NonJsonResponse,
    Success,
    TransportFailure,
    UpstreamOutcome,
    UpstreamRequest,
)
from core.settings import PharosSettings, load_settings

logger = logging.getLogger(__name__)

USER_AGENT = "MCPPharosServer/1.0.0 (ModelContextProtocol; +https://modelcontextprotocol.io)"

# Truncation limits.  They bound log and payload size only.
QUERY_PREVIEW_CHARS = 200
VARIABLES_PREVIEW_CHARS = 150
NON_JSON_LOG_PREVIEW_CHARS = 500
NON_JSON_RESPONSE_CHARS = 1000

FALLBACK_CLIENT_ERROR = (
    "An unexpected client-side error occurred while attempting to query "
    "the Pharos GraphQL API."
)


def build_request(invocation: Invocation, endpoint: str) -> UpstreamRequest:
    """Derive the HTTP request for an invocation.

    ``variables`` is only put in the body when the caller supplied it.
    """
    body: dict[str, Any] = {"query": invocation.query}
    if invocation.variables is not None:
        body["variables"] = invocation.variables

    return UpstreamRequest(
        endpoint=endpoint,
        headers={
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
        body=body,
    )


def _describe_exception(exc: BaseException) -> str:
    # URLError wraps the real cause (socket error, timeout) in .reason
    reason = getattr(exc, "reason", None)
    message = str(reason) if reason is not None else str(exc)
    return message or FALLBACK_CLIENT_ERROR


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Invalid JSON token: {token}")


def _classify(status: int, raw: bytes) -> UpstreamOutcome:
    text = raw.decode("utf-8", errors="replace")
    try:
        body = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        logger.error(
            f"Pharos API response is not JSON. Status: {status}, "
            f"Body: {text[:NON_JSON_LOG_PREVIEW_CHARS]}"
        )
        return NonJsonResponse(status_code=status, raw_text=text[:NON_JSON_RESPONSE_CHARS])

    if not 200 <= status < 300:
        logger.error(f"Pharos API HTTP Error {status}: {json.dumps(body)}")
        return GraphQLHttpError(status_code=status, body=body)

    return Success(payload=body)


def execute_query(
    invocation: Invocation,
    settings: Optional[PharosSettings] = None,
) -> UpstreamOutcome:
    """POST one query to Pharos and classify the outcome.

    This never raises for anything that happens on the wire: connection
    problems, timeouts, error statuses and unparseable bodies all come back
    as one of the four UpstreamOutcome variants.

    Args:
        invocation: The query and optional variables to send.
        settings: Endpoint and timeout.  Read from the environment if omitted.

    Returns:
        Exactly one of Success, GraphQLHttpError, NonJsonResponse or
        TransportFailure.
    """
    if settings is None:
        try:
            settings = load_settings()
        except ValueError as e:
            logger.error(f"Invalid Pharos configuration: {e}")
            return TransportFailure(message=str(e))

    request = build_request(invocation, settings.endpoint)

    logger.info(f"Making GraphQL request to: {request.endpoint}")
    try:
        # Building the Request is inside the guard: a malformed endpoint
        # fails here with ValueError
        http_request = urllib.request.Request(
            request.endpoint,
            data=json.dumps(request.body).encode("utf-8"),
            headers=request.headers,
            method=request.method,
        )
        try:
            with urllib.request.urlopen(http_request, timeout=settings.timeout_seconds) as response:
                status = response.status
                raw = response.read()
        except urllib.error.HTTPError as e:
            # Non-2xx still carries a body worth classifying
            status = e.code
            try:
                raw = e.read()
            finally:
                e.close()
    except Exception as e:
        message = _describe_exception(e)
        logger.error(f"Client-side error during Pharos GraphQL request: {message}")
        return TransportFailure(message=message)

    logger.info(f"Pharos API response status: {status}")
    return _classify(status, raw)


def outcome_to_response(outcome: UpstreamOutcome) -> Any:
    """Serialize an outcome to the GraphQL-shaped response the caller sees.

    Success is returned as-is.  The three failure variants become a single
    entry in an ``errors`` list with an ``extensions`` object, the same shape
    a GraphQL server uses for its own errors.
    """
    if isinstance(outcome, Success):
        return outcome.payload

    if isinstance(outcome, GraphQLHttpError):
        return {
            "errors": [{
                "message": f"Pharos API HTTP Error {outcome.status_code}",
                "extensions": {
                    "statusCode": outcome.status_code,
                    "responseBody": outcome.body,
                },
            }]
        }

    if isinstance(outcome, NonJsonResponse):
        return {
            "errors": [{
                "message": f"Pharos API Error {outcome.status_code}: Non-JSON response.",
                "extensions": {
                    "statusCode": outcome.status_code,
                    "responseText": outcome.raw_text,
                },
            }]
        }

    if isinstance(outcome, TransportFailure):
        return {
            "errors": [{
                "message": outcome.message,
                "extensions": {"clientError": outcome.client_error},
            }]
        }

    raise TypeError(f"Unknown upstream outcome: {type(outcome).__name__}")


def run_query(
    query: str,
    variables: Optional[dict[str, Any]] = None,
    settings: Optional[PharosSettings] = None,
) -> Any:
    """Execute a query and return its serialized response in one step."""
    outcome = execute_query(Invocation(query=query, variables=variables), settings)
    return outcome_to_response(outcome)
