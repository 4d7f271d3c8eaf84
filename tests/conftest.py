"""
pytest configuration and fixtures.
"""

import socket
import threading
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from staticserver import HTTPServer, ServerConfig
from staticserver.core.connection import Connection


INDEX_HTML = b"<!DOCTYPE html>\n<h1>Home</h1>\n"
SUB_INDEX_HTML = b"<h1>Sub</h1>\n"
STYLE_CSS = b"body { margin: 0 }\n"


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """
    A small site to serve:

        site/
        ├── index.html
        ├── style.css
        ├── empty.txt          (zero bytes)
        ├── LOGO.PNG
        ├── sub/
        │   └── index.html
        ├── docs/
        │   └── readme.md
        └── noindex/           (directory without index.html)

    A secret.txt sits NEXT TO the root, for traversal tests.
    """
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "style.css").write_bytes(STYLE_CSS)
    (root / "empty.txt").write_bytes(b"")
    (root / "LOGO.PNG").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "sub").mkdir()
    (root / "sub" / "index.html").write_bytes(SUB_INDEX_HTML)
    (root / "docs").mkdir()
    (root / "docs" / "readme.md").write_bytes(b"# Docs\n")
    (root / "noindex").mkdir()

    (tmp_path / "secret.txt").write_bytes(b"top secret\n")
    return root


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SFS_* variables from the outer shell out of the tests."""
    for name in ("SFS_DIRECTORY", "SFS_HOST", "SFS_PORT", "SFS_TIMEOUT",
                 "SFS_LOG_LEVEL", "SFS_THREADED", "SFS_CRLF"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(site_root: Path) -> ServerConfig:
    """Test server configuration."""
    return ServerConfig(
        root=str(site_root),
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        timeout=0.5,
    )


@pytest.fixture
def server(config: ServerConfig) -> HTTPServer:
    return HTTPServer(config)


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def read_all(sock: socket.socket) -> bytes:
    """Read until the peer closes."""
    chunks = []
    while True:
        chunk = sock.recv(65536)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def exchange(server: HTTPServer, payload: bytes) -> bytes:
    """
    Run one request through handle_connection over a socketpair.

    No listener involved: the server end of the pair is wrapped in a
    Connection exactly as the accept loop would wrap a TCP socket.
    """
    client, server_end = socket.socketpair()
    try:
        client.settimeout(5.0)
        if payload:
            client.sendall(payload)
        conn = Connection(
            socket=server_end,
            address=("127.0.0.1", 50000),
            buffer_size=server.config.buffer_size,
            timeout=server.config.timeout,
        )
        server.handle_connection(conn)
        return read_all(client)
    finally:
        client.close()
        server_end.close()


@pytest.fixture
def handle(server: HTTPServer):
    """Send raw request bytes to the test server, get raw response bytes."""
    def _handle(payload: bytes) -> bytes:
        return exchange(server, payload)
    return _handle


@pytest.fixture
def exchange_with():
    """exchange() for tests that build their own HTTPServer."""
    return exchange


class RunningServer:
    """Server running its accept loop in a background thread."""

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        # Bound and listening before the thread starts, so clients can
        # connect immediately; the backlog holds them until accept()
        self.server.bind()
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

    def request(self, payload: bytes) -> bytes:
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            if payload:
                s.sendall(payload)
            return read_all(s)


@pytest.fixture
def running_server(server: HTTPServer) -> Generator[RunningServer, None, None]:
    """
    A live server on a free port.

    The accept loop has no shutdown hook; its daemon thread ends with
    the test process.
    """
    running = RunningServer(server)
    running.start()
    yield running
