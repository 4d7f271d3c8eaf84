"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps an accepted client socket with the small API the request handler
needs: one read, one write, close.

=============================================================================
ONE READ, ONE RESPONSE
=============================================================================

TCP is a byte stream: a request can arrive split across several
packets. A complete server buffers until it sees the end of the
headers. This one deliberately does NOT:

    recv(buffer_size)   ← exactly one read, whatever arrives
    parse first line    ← only "METHOD RESOURCE" is needed
    sendall(response)
    close()

Clients send the request line in the first segment in practice. A
request line split across reads is treated as whatever the first read
holds, which is a known limitation.

=============================================================================
TIMEOUTS
=============================================================================

The socket timeout bounds BOTH the read and the write. A client that
connects and sends nothing, or stops reading, raises TimeoutError after
`timeout` seconds; the handler answers 408 Request Timeout.

=============================================================================
"""

import socket
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional


logger = logging.getLogger(__name__)

# Unread request bytes discarded per recv() on close
DRAIN_CHUNK_SIZE = 65536


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier (for logging).
        buffer_size: Size of the single request read.
        timeout: Read/write timeout in seconds (None = blocking).
    """

    socket: socket.socket
    address: tuple = ("-", 0)

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    buffer_size: int = 1024
    timeout: Optional[float] = 1.0

    closed: bool = field(default=False, repr=False)

    def __post_init__(self):
        # settimeout covers recv() and sendall() alike
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0] if self.address else "-"

    def read_request(self) -> bytes:
        """
        Read up to buffer_size bytes from the socket.

        Returns b"" if the client closed without sending anything.

        Raises:
            TimeoutError: Nothing arrived within the timeout.
            OSError: Any other transport failure.
        """
        data = self.socket.recv(self.buffer_size)
        logger.debug(f"[{self.id}] Read {len(data)} bytes")
        return data

    def send_response(self, data: bytes) -> None:
        """
        Send response bytes to the client.

        Uses sendall() so that all data is sent; a plain send() might
        stop short when the kernel buffer is full.

        Raises:
            TimeoutError: The client stopped reading.
            OSError: The client went away.
        """
        self.socket.sendall(data)
        logger.debug(f"[{self.id}] Sent {len(data)} bytes")

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_WR) sends the end of the response. That alone does
        not prevent a reset: closing a socket with unread request bytes
        (anything past the single read) makes the kernel answer with RST,
        which can destroy the response before the client reads it. So
        whatever is already readable is drained first. Safe to call more
        than once.
        """
        if self.closed:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        self._drain()

        try:
            self.socket.close()
        except OSError:
            pass

        self.closed = True
        logger.debug(f"[{self.id}] Connection closed")

    def _drain(self, max_reads: int = 64):
        """Discard request bytes already received, without blocking."""
        try:
            self.socket.setblocking(False)
            for _ in range(max_reads):
                if not self.socket.recv(DRAIN_CHUNK_SIZE):
                    break
        except OSError:
            pass  # Nothing left to read (BlockingIOError) or peer gone

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
