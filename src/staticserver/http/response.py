"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Assembles a status line, headers and an optional body into the bytes
written back on the connection.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTP/1.1 200 OK<EOL>                ← Status line                  │
    │   Content-Length: 13<EOL>             ← Headers (any order)          │
    │   Content-Type: text/html<EOL>                                       │
    │   <EOL>                               ← Only if there is a body      │
    │   <h1>Hi!</h1>                        ← Raw body bytes               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
LINE ENDINGS
=============================================================================

HTTP/1.1 says lines end in CRLF (\r\n). This server ends them with a
bare LF (\n) by default, because that is the wire format its existing
clients were written against. Pass line_ending="\r\n" (or run with
--crlf) for strict clients.

A response WITHOUT a body (status-only errors, HEAD) stops right after
the last header line: no blank separator line is written. A response
with an EMPTY body (GET of a zero-byte file) does get the separator.
That is why body is Optional[bytes] and not just bytes.

=============================================================================
BUILDER PATTERN
=============================================================================

    response = (ResponseBuilder()
        .status(HTTPStatus.OK)
        .header("Content-Type", "text/css")
        .body(b"body { margin: 0 }")
        .build())

=============================================================================
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .status_codes import HTTPStatus
from .mime_types import get_content_type


HTTP_VERSION = "HTTP/1.1"
DEFAULT_LINE_ENDING = "\n"

_STATUS_LINE_RE = re.compile(r"^HTTP/\d\.\d (\d{3}) (.*?)\r?$")


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    This is a simple data container. Use ResponseBuilder for a more
    convenient way to construct responses.

        Handler builds           to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{HTTP_VERSION} {self.status.code} {self.status.phrase}"

    @property
    def body_length(self) -> Optional[int]:
        """Length of the body, or None if the response has none."""
        return None if self.body is None else len(self.body)

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for chaining."""
        self.headers[name] = value
        return self

    def to_bytes(self, line_ending: str = DEFAULT_LINE_ENDING) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Unlike a general-purpose server, nothing is added here: no Date,
        no Server, no automatic Content-Length. What the handler put in
        the headers is exactly what goes on the wire.

        Args:
            line_ending: "\\n" (default) or "\\r\\n".

        Returns:
            Complete response ready for socket.sendall().
        """
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")

        head = "".join(line + line_ending for line in lines).encode("utf-8")
        if self.body is None:
            return head

        # Empty line separates headers from body
        return head + line_ending.encode("ascii") + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

    Every method returns self, so calls chain; build() produces the
    HTTPResponse.

    Usage:
        # Directory redirect
        ResponseBuilder().redirect("/docs/").build()

        # File contents
        ResponseBuilder().file(path, content).build()
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: Optional[bytes] = None

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def body(self, body: Optional[bytes]) -> "ResponseBuilder":
        self._body = body
        return self

    def redirect(self, location: str) -> "ResponseBuilder":
        """
        Make this a 302 Found pointing at location.

        302 is a temporary redirect: clients don't update bookmarks,
        which suits "add the trailing slash" redirects.
        """
        self._status = HTTPStatus.FOUND
        self._headers["Location"] = location
        return self

    def file(self, path, size: int, content: Optional[bytes] = None) -> "ResponseBuilder":
        """
        Describe a file: Content-Length and Content-Type headers, plus
        the body when content is given.

        size is passed separately so a HEAD response can advertise the
        length without reading the file.
        """
        self._headers["Content-Length"] = str(size)
        self._headers["Content-Type"] = get_content_type(path)
        if content is not None:
            self._body = content
        return self

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=self._headers,
            body=self._body,
        )

    def to_bytes(self, line_ending: str = DEFAULT_LINE_ENDING) -> bytes:
        """Build and serialize the response in one step."""
        return self.build().to_bytes(line_ending)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def status_response(status: HTTPStatus) -> HTTPResponse:
    """
    A bare status response: no headers, no body.

    Used for every error the server sends (400, 404, 405, 408, 500).
    """
    return HTTPResponse(status=status)


def redirect(location: str) -> HTTPResponse:
    """Create a 302 Found response."""
    return ResponseBuilder().redirect(location).build()


def parse_status_line(line: str | bytes) -> Tuple[int, str]:
    """
    Recover (code, phrase) from a serialized status line.

    Accepts a whole serialized response too: only the first line is
    looked at, whatever its terminator.

        >>> parse_status_line(b"HTTP/1.1 404 Not Found\\n")
        (404, 'Not Found')

    Raises:
        ValueError: If the first line is not a status line.
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")

    first = line.split("\n", 1)[0]
    match = _STATUS_LINE_RE.match(first)
    if match is None:
        raise ValueError(f"Not an HTTP status line: {first!r}")

    return int(match.group(1)), match.group(2)
