"""
HTTP vocabulary and wire format.

    http/
    ├── methods.py        HTTPMethod (closed set, exact-match parse)
    ├── status_codes.py   HTTPStatus (code + reason phrase)
    ├── mime_types.py     extension -> Content-Type
    ├── request.py        bytes -> HTTPRequest (or None)
    └── response.py       HTTPResponse -> bytes

Nothing in this package touches sockets or the filesystem, so all of it
is unit-testable on plain values.
"""

from .methods import HTTPMethod
from .status_codes import HTTPStatus
from .mime_types import get_content_type, DEFAULT_MIME_TYPE, MIME_TYPES
from .request import HTTPRequest, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    status_response,
    redirect,
    parse_status_line,
)

__all__ = [
    "HTTPMethod",
    "HTTPStatus",
    "get_content_type",
    "DEFAULT_MIME_TYPE",
    "MIME_TYPES",
    "HTTPRequest",
    "parse_request",
    "HTTPResponse",
    "ResponseBuilder",
    "status_response",
    "redirect",
    "parse_status_line",
]
