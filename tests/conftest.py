"""
Shared fixtures: a scriptable fake Pharos endpoint.

The fake upstream is a real HTTP server on 127.0.0.1 running in a background
thread, so the executor's urllib code path runs unmodified.
"""

from __future__ import annotations

import json
import socket
import threading
import time
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Iterator

import pytest

from core.settings import PharosSettings


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class FakePharos:
    """Upstream whose next responses are set by the test."""

    url: str
    status: int = 200
    body: bytes = b'{"data": {}}'
    content_type: str = "application/json"
    delay: float = 0.0
    requests: list[RecordedRequest] = field(default_factory=list)

    def respond(
        self,
        status: int = 200,
        body: Any = None,
        *,
        raw: bytes | None = None,
        content_type: str = "application/json",
        delay: float = 0.0,
    ) -> None:
        self.status = status
        self.body = raw if raw is not None else json.dumps(body).encode("utf-8")
        self.content_type = content_type
        self.delay = delay

    def settings(self, timeout_seconds: float = 5.0) -> PharosSettings:
        return PharosSettings(endpoint=self.url, timeout_seconds=timeout_seconds)


def _make_handler(fake: FakePharos) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def do_POST(self) -> None:  # noqa: N802
            length = int(self.headers.get("Content-Length", 0))
            fake.requests.append(
                RecordedRequest(
                    method="POST",
                    path=self.path,
                    headers={k: v for k, v in self.headers.items()},
                    body=self.rfile.read(length),
                )
            )
            if fake.delay:
                time.sleep(fake.delay)
            try:
                self.send_response(fake.status)
                self.send_header("Content-Type", fake.content_type)
                self.send_header("Content-Length", str(len(fake.body)))
                self.end_headers()
                self.wfile.write(fake.body)
            except (BrokenPipeError, ConnectionResetError):
                # Client gave up (timeout tests)
                pass

        def log_message(self, format: str, *args: Any) -> None:
            pass

    return Handler


@pytest.fixture(autouse=True)
def _no_proxy_for_localhost(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


@pytest.fixture
def fake_pharos() -> Iterator[FakePharos]:
    server = ThreadingHTTPServer(("127.0.0.1", 0), BaseHTTPRequestHandler)
    server.daemon_threads = True
    host, port = server.server_address[:2]
    fake = FakePharos(url=f"http://{host}:{port}/graphql")
    server.RequestHandlerClass = _make_handler(fake)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield fake
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_port_url() -> str:
    """A URL on a local port with nothing listening."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/graphql"
