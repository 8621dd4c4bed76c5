"""Pytest configuration and fixtures."""

import asyncio
import http.server
import json
import socketserver
import threading

import pytest

from atlas.core.context import AtlasContext
from atlas.headless import HeadlessMapSurface, HeadlessUI
from tests.fakes import FakeDataApi


@pytest.fixture
def fake_api():
    """Data API serving the sample locations and kingdoms."""
    return FakeDataApi()


@pytest.fixture
def map_surface():
    return HeadlessMapSurface()


@pytest.fixture
def ui():
    """Desktop-sized headless UI (wider than the auto-reveal threshold)."""
    return HeadlessUI(width=1280)


@pytest.fixture
def context(fake_api, map_surface, ui):
    """Unloaded atlas context wired to in-memory collaborators."""
    return AtlasContext(fake_api, map_surface, ui)


@pytest.fixture
def loaded_context(context):
    """Atlas context after a successful load of the sample data."""
    asyncio.run(context.load_map_data())
    return context


@pytest.fixture
def api_server(tmp_path):
    """
    Fixture for creating a local JSON API server for testing.

    Serves files from a temporary directory; ``api_server.add(path, payload)``
    writes a JSON document that is then served at ``/<path>``.

    Usage:
        def test_client(api_server):
            api_server.add("kingdoms/1/size", {"size": 1234})
            api_server.fail("kingdoms/1/size", 503)  # first request answers 503
            client = AtlasApiClient(base_url=api_server.base_url)

    Attributes:
        port (int): The port the server is listening on
        fixtures_dir (Path): Directory the server serves from
        base_url (str): Root URL of the server
        requests (list): Paths requested so far, in order
    """

    failures = {}  # request path -> statuses to answer before serving the file
    requests = []

    class ApiServer:
        def __init__(self, port, fixtures_dir):
            self.port = port
            self.fixtures_dir = fixtures_dir
            self.requests = requests

        def fail(self, path, status, times=1):
            """Answer the next ``times`` requests for ``path`` with an error status."""
            failures["/" + path.lstrip("/")] = [status] * times

        @property
        def base_url(self):
            return f"http://127.0.0.1:{self.port}"

        def add(self, path, payload):
            target = self.fixtures_dir / path
            target.parent.mkdir(parents=True, exist_ok=True)
            text = payload if isinstance(payload, str) else json.dumps(payload)
            target.write_text(text, encoding="utf-8")

    fixtures_dir = tmp_path / "api_fixtures"
    fixtures_dir.mkdir()

    class ApiHTTPRequestHandler(http.server.SimpleHTTPRequestHandler):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, directory=str(fixtures_dir), **kwargs)

        def do_GET(self):
            requests.append(self.path)
            pending = failures.get(self.path)
            if pending:
                self.send_error(pending.pop(0))
                return
            super().do_GET()

        def log_message(self, format, *args):
            pass  # Suppress logging during tests

    # Start server on auto-assigned port
    server = socketserver.TCPServer(("127.0.0.1", 0), ApiHTTPRequestHandler)
    port = server.server_address[1]

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield ApiServer(port, fixtures_dir)

    # Cleanup: shutdown server
    server.shutdown()
    server.server_close()
    thread.join(timeout=1.0)
