"""
HTTP request methods.

Only GET and HEAD are served; every other method is recognized (so it
gets a 405 rather than a 400) but never dispatched.

    ┌──────────┬────────────────────────────────────────────┐
    │  Method  │ Outcome for an existing file               │
    ├──────────┼────────────────────────────────────────────┤
    │  GET     │ 200 with headers and body                  │
    │  HEAD    │ 200 with headers only                      │
    │  other   │ 405 Method Not Allowed                     │
    └──────────┴────────────────────────────────────────────┘
"""

from enum import Enum


class HTTPMethod(Enum):
    """The closed set of request methods the parser accepts."""

    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, token: str) -> "HTTPMethod":
        """
        Parse a method token.

        Matching is exact: methods are case-sensitive, so "get" is not
        GET. Unknown tokens raise ValueError; there is no fallback.
        """
        try:
            return cls(token)
        except ValueError:
            raise ValueError(f"Unknown HTTP method: {token!r}") from None

    @property
    def sends_body(self) -> bool:
        """Whether a successful response to this method carries the file."""
        return self is HTTPMethod.GET

    def __str__(self) -> str:
        return self.value
