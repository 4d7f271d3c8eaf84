"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The closed set of statuses this server ever sends, with their reason
phrases.

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  Code  │ When we send it                                           │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  200   │ File served (GET with body, HEAD without)                 │
    │  302   │ Directory requested without its trailing slash           │
    │  400   │ Request line could not be parsed                          │
    │  404   │ Path does not exist (or escapes the served root)          │
    │  405   │ Any method other than GET or HEAD                         │
    │  408   │ Socket read/write timed out                               │
    │  500   │ Any other I/O failure                                     │
    └────────┴───────────────────────────────────────────────────────────┘

The table is fixed. Adding a status means adding a member AND a phrase.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes as an enumeration.

    Inherits from IntEnum so each status compares and formats as its
    numeric code:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> f"{HTTPStatus.NOT_FOUND.code} {HTTPStatus.NOT_FOUND.phrase}"
        '404 Not Found'
    """

    OK = 200                        # File served
    FOUND = 302                     # Directory redirect
    BAD_REQUEST = 400               # Unparseable request line
    NOT_FOUND = 404                 # No such path
    METHOD_NOT_ALLOWED = 405        # Not GET or HEAD
    REQUEST_TIMEOUT = 408           # Client too slow
    INTERNAL_SERVER_ERROR = 500     # Unexpected I/O failure

    @property
    def code(self) -> int:
        """Numeric status code."""
        return int(self)

    @property
    def phrase(self) -> str:
        """
        Reason phrase for this status code.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      │
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES[self]

    @property
    def is_error(self) -> bool:
        """True for 4xx and 5xx statuses."""
        return self >= 400

    @classmethod
    def from_code(cls, code: int) -> "HTTPStatus":
        """Look up a status by number; raises ValueError if unknown."""
        return cls(code)


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.REQUEST_TIMEOUT: "Request Timeout",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
