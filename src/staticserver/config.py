"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the static file server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── staticserver --port 8000                                   │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── SFS_PORT=8000 staticserver                                 │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The config is FROZEN. It is built once at startup and then shared,
read-only, by every connection (and every worker thread in threaded
mode). Nothing else is shared between connections.

=============================================================================
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import InvalidDirectoryError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the static file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    CONTENT
    - root, index_file

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    BEHAVIOR
    - threaded, crlf

    LOGGING
    - log_level

    =========================================================================

    The root is validated and normalized to an absolute path on
    construction, so an existing ServerConfig always points at a real
    directory:

        ServerConfig(root="public")        # ok if ./public is a directory
        ServerConfig(root="missing")       # raises InvalidDirectoryError
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    root: str = "."
    """Directory to serve. Stored as an absolute, normalized path."""

    index_file: str = "index.html"
    """File served for a directory requested with a trailing slash."""

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All IPv4 interfaces (default)
    - "127.0.0.1" - Localhost only
    """

    port: int = 1024
    """Port to listen on. 0 lets the OS pick a free port."""

    backlog: int = 128
    """Maximum number of queued connections."""

    buffer_size: int = 1024
    """
    Size of the single read that must hold the request line.
    Longer requests are truncated; only the first two tokens matter.
    """

    timeout: float = 1.0
    """Read and write timeout for each accepted connection, in seconds."""

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOR
    # ─────────────────────────────────────────────────────────────────────

    threaded: bool = False
    """Handle each connection on its own thread instead of inline."""

    crlf: bool = False
    """
    Terminate response lines with CRLF instead of a bare LF.
    Bare LF is the default for compatibility with existing clients.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    def __post_init__(self):
        path = Path(self.root)
        if not path.is_dir():
            raise InvalidDirectoryError(str(self.root))

        # frozen dataclass: bypass __setattr__ for the normalized value
        object.__setattr__(self, "root", str(path.resolve()))
        object.__setattr__(self, "log_level", self.log_level.upper())
        self.validate()

    @property
    def line_ending(self) -> str:
        """Line terminator used when serializing responses."""
        return "\r\n" if self.crlf else "\n"

    @property
    def root_path(self) -> Path:
        return Path(self.root)

    @classmethod
    def from_env(cls, **overrides) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        SFS_DIRECTORY   Directory to serve (default: .)
        SFS_HOST        Bind address (default: 0.0.0.0)
        SFS_PORT        Bind port (default: 1024)
        SFS_TIMEOUT     Connection timeout in seconds (default: 1)
        SFS_LOG_LEVEL   Logging level (default: INFO)
        SFS_THREADED    Thread per connection (default: off)
        SFS_CRLF        CRLF line endings (default: off)

        =====================================================================

        Keyword overrides win over the environment. A None override is
        ignored, which lets the CLI pass unset options straight through.
        """
        values = {}

        directory = os.getenv("SFS_DIRECTORY")
        if directory is not None:
            values["root"] = directory
        host = os.getenv("SFS_HOST")
        if host is not None:
            values["host"] = host
        port = os.getenv("SFS_PORT")
        if port is not None:
            values["port"] = int(port)
        timeout = os.getenv("SFS_TIMEOUT")
        if timeout is not None:
            values["timeout"] = float(timeout)
        log_level = os.getenv("SFS_LOG_LEVEL")
        if log_level is not None:
            values["log_level"] = log_level
        for name, key in (("threaded", "SFS_THREADED"), ("crlf", "SFS_CRLF")):
            flag = _env_flag(key)
            if flag is not None:
                values[name] = flag

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """
        Validate configuration values.

        Called from __post_init__ so a bad config fails at startup,
        never on the first request.
        """
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES
