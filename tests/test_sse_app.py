"""
Tests for the HTTP routing in front of the SSE transport.
"""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from tools.mcp_server import mcp
from tools.sse_app import NOT_FOUND_BODY, SSE_PATH, create_app, is_sse_path


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(mcp))


@pytest.mark.parametrize("path", ["/", "/mcp", "/messages/", "/ssex", "/api/sse", "/favicon.ico"])
def test_unknown_paths_get_fixed_404(client: TestClient, path: str) -> None:
    response = client.get(path)

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == NOT_FOUND_BODY


def test_404_body_names_the_sse_path(client: TestClient) -> None:
    response = client.post("/graphql", json={"query": "{ a }"})

    assert response.status_code == 404
    assert "- /sse (for Server-Sent Events transport)" in response.text


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/sse", True),
        ("/sse/", True),
        ("/sse/messages/", True),
        ("/sse/messages/?session_id=abc", True),
        ("/ssex", False),
        ("/", False),
        ("/SSE", False),
        ("", False),
    ],
)
def test_is_sse_path(path: str, expected: bool) -> None:
    assert is_sse_path(path) is expected


def test_message_endpoint_is_routed_to_fastmcp(client: TestClient) -> None:
    # Without a session FastMCP rejects the post, but it is not our 404
    response = client.post(f"{SSE_PATH}/messages/", json={})

    assert response.text != NOT_FOUND_BODY
