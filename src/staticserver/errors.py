"""
Error types raised by the static file server.

Transport and filesystem failures are not wrapped: they surface as the
builtin OSError family, with TimeoutError (what a socket timeout raises)
as the one sub-kind the server treats differently.
"""


class StaticServerError(Exception):
    """Base class for errors raised by the server itself."""


class InvalidDirectoryError(StaticServerError):
    """
    Raised when the configured root is missing or is not a directory.

    This is a startup failure: the CLI prints the message and exits with
    status 1.
    """

    def __init__(self, path: str):
        super().__init__(f"Invalid directory: {path}")
        self.path = path
