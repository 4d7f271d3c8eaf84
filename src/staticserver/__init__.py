"""
=============================================================================
STATICSERVER - A Minimal Static File HTTP Server
=============================================================================

Serves the files under one directory over plain TCP sockets.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        PACKAGE LAYOUT                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   staticserver/                                                     │
    │   ├── config.py          ServerConfig (frozen, validated)          │
    │   ├── errors.py          StaticServerError, InvalidDirectoryError  │
    │   ├── server.py          HTTPServer: the request pipeline          │
    │   ├── __main__.py        CLI                                        │
    │   ├── core/                                                         │
    │   │   ├── socket_server.py   bind + accept loop                    │
    │   │   └── connection.py      one client socket                     │
    │   ├── handlers/                                                     │
    │   │   └── static.py          path resolution + file serving        │
    │   └── http/                                                         │
    │       ├── methods.py         HTTPMethod                            │
    │       ├── status_codes.py    HTTPStatus                            │
    │       ├── mime_types.py      extension -> Content-Type             │
    │       ├── request.py         request line parser                   │
    │       └── response.py        response serialization                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUICK START
=============================================================================

    from staticserver import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(root="public", port=8000))
    server.run()

Or from the shell:

    python -m staticserver -d public -p 8000

=============================================================================
"""

__version__ = "0.1.0"

from .config import ServerConfig
from .errors import StaticServerError, InvalidDirectoryError
from .server import HTTPServer, create_server
from .handlers import StaticFileHandler
from .http import (
    HTTPMethod,
    HTTPStatus,
    HTTPRequest,
    HTTPResponse,
    ResponseBuilder,
    get_content_type,
    parse_request,
)

__all__ = [
    "__version__",
    "ServerConfig",
    "StaticServerError",
    "InvalidDirectoryError",
    "HTTPServer",
    "create_server",
    "StaticFileHandler",
    "HTTPMethod",
    "HTTPStatus",
    "HTTPRequest",
    "HTTPResponse",
    "ResponseBuilder",
    "get_content_type",
    "parse_request",
]
