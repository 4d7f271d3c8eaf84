"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the bytes of a single socket read into a structured HTTPRequest.

=============================================================================
WHAT WE PARSE (AND WHAT WE DON'T)
=============================================================================

Only the first two space-separated tokens of the buffer matter:

    GET /docs/index.html HTTP/1.1\r\nHost: example.com\r\n\r\n
    ─┬─ ────────┬─────── ─────────────────┬──────────────────
     │          │                         │
   Method    Resource               Ignored entirely
                                    (version, headers, body)

    ┌─────────────────────────────────────────────────────────────────────┐
    │  Token     │ Decoding                    │ On failure              │
    ├────────────┼─────────────────────────────┼─────────────────────────┤
    │  method    │ UTF-8, bad bytes replaced   │ unknown method -> None  │
    │  resource  │ strict UTF-8                │ invalid UTF-8 -> None   │
    │  (missing) │                             │ < 2 tokens -> None      │
    └────────────┴─────────────────────────────┴─────────────────────────┘

The resource is used VERBATIM:
- not URL-decoded ("/a%20b" stays "/a%20b")
- query string not split ("/page?x=1" looks for a file named "page?x=1")
- whatever sits between the first and second space, CR/LF included

A request that does not fit in one read is truncated. Only the request
line is needed, so in practice this only bites absurdly long paths.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional

from .methods import HTTPMethod


SPACE = b" "


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed request: what was asked for, and how.

    Attributes:
        method:   The HTTP method.
        resource: The raw request-target, not yet checked against
                  the filesystem.
    """

    method: HTTPMethod
    resource: str

    @property
    def wants_directory(self) -> bool:
        """True when the resource names a directory explicitly ("/sub/")."""
        return self.resource.endswith("/")

    def __str__(self) -> str:
        return f"{self.method} {self.resource}"


def parse_request(data: bytes) -> Optional[HTTPRequest]:
    """
    Parse the first line of a request.

    Malformed input is not an error here: the caller gets None and
    answers 400 Bad Request.

    Args:
        data: Bytes from a single socket read.

    Returns:
        The parsed request, or None if the buffer does not start with
        a known method followed by a UTF-8 resource.

    Examples:
        >>> parse_request(b"GET /index.html HTTP/1.1\\r\\n\\r\\n")
        HTTPRequest(method=<HTTPMethod.GET: 'GET'>, resource='/index.html')

        >>> parse_request(b"FOO / HTTP/1.1") is None
        True
    """
    tokens = data.split(SPACE, 2)
    if len(tokens) < 2:
        return None

    method_token = tokens[0].decode("utf-8", errors="replace")
    try:
        method = HTTPMethod.parse(method_token)
    except ValueError:
        return None

    try:
        resource = tokens[1].decode("utf-8")
    except UnicodeDecodeError:
        return None

    return HTTPRequest(method=method, resource=resource)
