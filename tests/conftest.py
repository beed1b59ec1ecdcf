from __future__ import annotations

import threading
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Iterator

import pytest

from probe import ProbeResult
from settings import Settings


class LaunchRecorder:
    def __init__(self, exit_code: int = 0, error: Exception | None = None):
        self.exit_code = exit_code
        self.error = error
        self.calls: list[tuple] = []

    def __call__(self, projects, extra_args, options, engine_command=None):
        self.calls.append((list(projects), list(extra_args), options))
        if self.error is not None:
            raise self.error
        return self.exit_code


class ProbeStub:
    def __init__(self, result: ProbeResult):
        self.result = result
        self.calls: list[tuple[str, int]] = []

    def __call__(self, url, timeout_ms):
        self.calls.append((url, timeout_ms))
        return self.result


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        base_url="http://127.0.0.1:8083",
        probe_timeout_ms=500,
        report_dir=tmp_path / "playwright-report",
        results_dir=tmp_path / "test-results",
        engine_command=["solace-engine"],
    )


@pytest.fixture
def launcher_spy() -> LaunchRecorder:
    return LaunchRecorder()


@pytest.fixture
def reachable() -> ProbeStub:
    return ProbeStub(ProbeResult.REACHABLE)


@pytest.fixture
def app_server():
    return serve_app


@contextmanager
def serve_app(status: int = 200) -> Iterator[tuple[str, list[str]]]:
    calls: list[str] = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            calls.append(f"GET {self.path}")
            body = b"<html><body><div id='root'>Solace</div></body></html>"
            self.send_response(status)
            self.send_header("Content-Type", "text/html")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args) -> None:  # noqa: A002
            return

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}", calls
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=2)
