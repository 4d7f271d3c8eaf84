"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

Binds the listening socket and hands every accepted connection to a
callback. Think of it as the "ears" of the server: it knows nothing
about HTTP.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a TCP socket
    2. bind()      Reserve HOST:PORT          ← fails fast, at startup
    3. listen()    Start queueing connections
    4. accept()    Wait for a client           ← loops forever
                   └─ Returns a NEW socket for that client

                    ┌───────────────────────┐
                    │   Listening Socket    │ ◄── Created once at startup
                    │   bound 0.0.0.0:1024  │     Never sends/receives data
                    └───────────┬───────────┘
                                │ accept()
                                ▼
                    ┌───────────────────────┐
                    │   Client Connection   │ ◄── 1s timeout, handled,
                    └───────────────────────┘     then closed

=============================================================================
ERROR POLICY
=============================================================================

    bind() fails        →  OSError raised to the caller (fatal)
    accept() fails      →  logged, loop continues
    handler fails       →  the handler's problem; it must not raise

There is no shutdown hook: the loop runs until the process is stopped.

=============================================================================
"""

import socket
import logging
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.bind()                         # raises OSError if taken
        server.serve_forever(handle_connection)  # never returns
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self._socket: Optional[socket.socket] = None

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port).

        After bind() this is the real address, so port 0 in the config
        reports the port the OS picked.
        """
        if self._socket is not None:
            host, port = self._socket.getsockname()[:2]
            return host, port
        return (self.config.host, self.config.port)

    @property
    def is_bound(self) -> bool:
        return self._socket is not None

    def _create_socket(self) -> socket.socket:
        """
        Create and configure the server socket.

        SO_REUSEADDR: without it a restart fails with "Address already in
        use" while the old socket sits in TIME_WAIT.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return sock

    def bind(self) -> None:
        """
        Bind and listen.

        Raises:
            OSError: Address in use, permission denied (ports < 1024
                     need root on Unix), unknown host.
        """
        if self._socket is not None:
            return

        sock = self._create_socket()
        try:
            sock.bind((self.config.host, self.config.port))
            sock.listen(self.config.backlog)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            raise

        self._socket = sock
        host, port = self.address
        logger.info(f"Serving {self.config.root} on {host}:{port}")

    def serve_forever(self, connection_handler: Callable[[Connection], None]):
        """
        Accept connections forever.

        Binds first if bind() has not been called. Each accepted socket
        is wrapped in a Connection carrying the configured timeout and
        buffer size, then passed to connection_handler.
        """
        self.bind()

        while True:
            try:
                client_socket, client_address = self._socket.accept()
            except OSError as e:
                logger.error(f"Could not accept connection: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            try:
                conn = Connection(
                    socket=client_socket,
                    address=client_address,
                    buffer_size=self.config.buffer_size,
                    timeout=self.config.timeout,
                )
            except OSError as e:
                logger.error(f"Could not configure connection: {e}")
                client_socket.close()
                continue

            connection_handler(conn)
