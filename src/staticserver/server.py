"""
=============================================================================
STATIC FILE SERVER
=============================================================================

The orchestrator: ties the listener, the parser, the static handler and
the response builder into one request pipeline.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    ┌──────┐   ┌───────┐   ┌─────────┐   ┌──────────┐   ┌─────────┐   ┌───────┐
    │ Read │──►│ Parse │──►│ Resolve │──►│ Dispatch │──►│ Respond │──►│ Close │
    └──────┘   └───┬───┘   └────┬────┘   └────┬─────┘   └─────────┘   └───────┘
                   │            │             │
                 None?        None?      dir w/o "/"? → 302 Location
                   │            │        dir with "/"? → dir/index.html
                   ▼            ▼        GET  → 200 + body
                  400          404       HEAD → 200, no body
                                         else → 405

Every stage except Read and Respond is a plain function of its inputs,
so respond() can be tested without a socket.

=============================================================================
FAILURES
=============================================================================

    ┌─────────────────────────────┬──────────────────────────────────────┐
    │  Raised during handling     │  Sent to the client                  │
    ├─────────────────────────────┼──────────────────────────────────────┤
    │  TimeoutError               │  408 Request Timeout                 │
    │  other OSError              │  500 Internal Server Error           │
    │  StaticServerError          │  500 Internal Server Error           │
    │  anything else (a bug)      │  500, with the traceback logged      │
    └─────────────────────────────┴──────────────────────────────────────┘

The error response is best-effort: if the connection is already broken,
sending it fails quietly. Nothing escapes handle_connection(), so one
bad client can never stop the accept loop.

=============================================================================
CONCURRENCY
=============================================================================

By default connections are handled one at a time, on the accept loop's
own thread. With threaded=True each connection gets a daemon thread.
The threads share only the frozen ServerConfig and the stateless
StaticFileHandler.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .errors import StaticServerError
from .core.connection import Connection
from .core.socket_server import SocketServer
from .handlers.static import serve_static
from .http.methods import HTTPMethod
from .http.request import HTTPRequest, parse_request
from .http.response import HTTPResponse, redirect, status_response
from .http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

# Access log: one line per request, separate from diagnostics so it can
# be routed on its own:
#   logging.getLogger("staticserver.access").addHandler(file_handler)
access_logger = logging.getLogger("staticserver.access")


class HTTPServer:
    """
    A static file server.

    Example:
        server = HTTPServer(ServerConfig(root="public", port=8000))
        server.run()   # blocks until Ctrl+C
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Args:
            config: Server configuration. Defaults serve "." on port 1024.

        Raises:
            InvalidDirectoryError: If the root is not a directory.
        """
        self.config = config or ServerConfig()

        self.static = serve_static(self.config.root, index_file=self.config.index_file)
        self._socket_server = SocketServer(self.config)

    @property
    def address(self) -> Tuple[str, int]:
        return self._socket_server.address

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level, logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("staticserver").setLevel(level)

    def bind(self) -> None:
        """
        Bind the listening socket now.

        Calling this before run() lets a caller tell "could not start"
        (OSError here) apart from "stopped".
        """
        self._socket_server.bind()

    def run(self):
        """
        Start the server (blocking).

        Returns only on Ctrl+C. A bind failure raises OSError.
        """
        try:
            self._socket_server.serve_forever(self._dispatch)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")

    def _dispatch(self, conn: Connection):
        if not self.config.threaded:
            self.handle_connection(conn)
            return

        thread = threading.Thread(
            target=self.handle_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            # Out of threads: drop this client, keep accepting
            logger.error(f"[{conn.id}] Could not start handler thread: {e}")
            conn.close()

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def handle_connection(self, conn: Connection) -> None:
        """
        Handle one connection: read, respond, close.

        Never raises. Failures become a best-effort 408 or 500.
        """
        request: Optional[HTTPRequest] = None

        with conn:  # Context manager ensures connection is closed
            try:
                request = parse_request(conn.read_request())
                response = self.respond(request)
                conn.send_response(response.to_bytes(self.config.line_ending))

            except TimeoutError:
                logger.info(f"[{conn.id}] Timed out")
                response = self._send_error(conn, HTTPStatus.REQUEST_TIMEOUT)

            except (OSError, StaticServerError) as e:
                logger.error(f"[{conn.id}] Request failed: {e}")
                response = self._send_error(conn, HTTPStatus.INTERNAL_SERVER_ERROR)

            except Exception as e:
                logger.exception(f"[{conn.id}] Unexpected error: {e}")
                response = self._send_error(conn, HTTPStatus.INTERNAL_SERVER_ERROR)

        self._log_access(conn, request, response)

    def respond(self, request: Optional[HTTPRequest]) -> HTTPResponse:
        """
        Turn a parsed request (or None) into a response.

        Raises:
            OSError: If the file to serve cannot be opened or read.
        """
        if request is None:
            return status_response(HTTPStatus.BAD_REQUEST)

        target = self.static.resolve(request.resource)
        if target is None:
            return status_response(HTTPStatus.NOT_FOUND)

        path = target.path
        if target.is_dir:
            if not request.wants_directory:
                return redirect(self.static.redirect_location(target))
            path = self.static.index_path(target)

        if request.method in (HTTPMethod.GET, HTTPMethod.HEAD):
            return self.static.serve(path, include_body=request.method.sends_body)

        return status_response(HTTPStatus.METHOD_NOT_ALLOWED)

    def _send_error(self, conn: Connection, status: HTTPStatus) -> HTTPResponse:
        """
        Send a bare status response, ignoring failures.

        By the time we get here the connection may be half-written or
        reset; there is nothing better to do than try once.
        """
        response = status_response(status)
        try:
            conn.send_response(response.to_bytes(self.config.line_ending))
        except OSError as e:
            logger.debug(f"[{conn.id}] Could not send {status.code}: {e}")
        return response

    def _log_access(
        self,
        conn: Connection,
        request: Optional[HTTPRequest],
        response: HTTPResponse,
    ):
        size = response.body_length
        access_logger.info(
            f'{conn.client_ip} "{request or "-"}" {response.status.code} '
            f'{"-" if size is None else size}'
        )


def create_server(config: Optional[ServerConfig] = None) -> HTTPServer:
    """
    Create a server instance.

    Factory function mirroring HTTPServer(config).
    """
    return HTTPServer(config)
