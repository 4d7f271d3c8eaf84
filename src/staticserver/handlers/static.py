"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Maps request resources onto files under the served root, and reads
those files into responses.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

The resource string comes straight off the network. Joined naively onto
the root, it can name anything on the machine:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  GET /../../../etc/passwd HTTP/1.1                                  │
    │                                                                      │
    │  root/../../../etc/passwd  →  /etc/passwd   (outside the root!)     │
    │                                                                      │
    │  GET //etc/passwd HTTP/1.1                                          │
    │                                                                      │
    │  join(root, "/etc/passwd")  →  /etc/passwd  (absolute path wins)    │
    └─────────────────────────────────────────────────────────────────────┘

Our protection:
1. Canonicalize the joined path (follow .. and symlinks)
2. Check that it is still the root or inside it
3. If not, behave exactly as if the path did not exist (404)

Answering 404 rather than 403 gives a prober no signal about what lives
outside the root.

=============================================================================
DIRECTORIES
=============================================================================

    GET /docs     (docs is a directory)  →  302, Location: /docs/
    GET /docs/                           →  serve docs/index.html

The index file is NOT checked for existence here. If it is missing, the
open fails while serving and the client gets a 500.

=============================================================================
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import InvalidDirectoryError
from ..http.response import HTTPResponse, ResponseBuilder


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTarget:
    """
    A path confirmed to exist under the root.

    "No such path" is not a ResolvedTarget: resolve() returns None.

    Attributes:
        path:      Canonical path (symlinks and ".." resolved), used for
                   reading files.
        is_dir:    Whether the path is a directory.
        requested: The resource as asked for, relative to the root and
                   not canonicalized ("docs/../sub", "alias"). Redirects
                   are built from this so the client keeps its own URL.
    """

    path: Path
    is_dir: bool = False
    requested: str = ""


class StaticFileHandler:
    """
    Resolves resources against a root directory and serves files from it.

    The handler holds no per-request state, so one instance is shared by
    every connection.

    Usage:
        static = StaticFileHandler("/var/www")

        target = static.resolve("/css/site.css")
        if target is not None and not target.is_dir:
            response = static.serve(target.path, include_body=True)
    """

    def __init__(self, root_dir: str | Path, index_file: str = "index.html"):
        """
        Args:
            root_dir: Directory to serve. All served files MUST be inside it.
            index_file: File served for "/dir/" requests.

        Raises:
            InvalidDirectoryError: If root_dir is not a directory.
        """
        # Resolve up front: the containment check compares real paths
        self.root_dir = Path(root_dir).resolve()
        self.index_file = index_file

        if not self.root_dir.is_dir():
            raise InvalidDirectoryError(str(root_dir))

    # =========================================================================
    # PATH RESOLUTION
    # =========================================================================

    def resolve(self, resource: str) -> Optional[ResolvedTarget]:
        """
        Resolve a request resource to a path under the root.

        Args:
            resource: The raw resource from the request line.

        Returns:
            The target, or None if it does not exist or would escape
            the root.
        """
        # Strip ONE leading slash: "//x" keeps its second slash and
        # joins as an absolute path, which the containment check rejects
        relative = resource[1:] if resource.startswith("/") else resource
        candidate = os.path.join(self.root_dir, relative)

        real = self._contained(candidate)
        if real is None:
            logger.warning(f"Path traversal attempt: {resource!r}")
            return None

        # Check the joined path, not the real one: "file.txt/" must not
        # exist, and a trailing slash survives os.path but not pathlib
        if not os.path.exists(candidate):
            return None

        return ResolvedTarget(
            path=real,
            is_dir=os.path.isdir(candidate),
            requested=relative,
        )

    def redirect_location(self, target: ResolvedTarget) -> str:
        """
        The Location for a directory requested without its trailing slash.

            "docs/api"     →  "/docs/api/"
            "docs/../sub"  →  "/docs/../sub/"   (not "/sub/")
            ""             →  "/"

        Built from the requested path, not the canonical one: a symlinked
        directory keeps its own name in the URL.
        """
        if not target.requested:
            return "/"
        return f"/{target.requested}/"

    def index_path(self, target: ResolvedTarget) -> Path:
        """The index file of a directory target (may not exist)."""
        return target.path / self.index_file

    def is_within_root(self, path: str | Path) -> bool:
        return self._contained(os.fspath(path)) is not None

    def _contained(self, path: str) -> Optional[Path]:
        """
        Canonicalize path and return it if it is inside the root.

        Paths the OS cannot represent (embedded NUL bytes) are treated
        as outside.
        """
        try:
            real = os.path.realpath(path)
        except ValueError:
            return None

        root = str(self.root_dir)
        if os.path.commonpath([root, real]) != root:
            return None
        return Path(real)

    # =========================================================================
    # FILE SERVING
    # =========================================================================

    def serve(self, path: Path, include_body: bool) -> HTTPResponse:
        """
        Build a 200 response for a file.

        Content-Length is the file size and Content-Type comes from the
        extension. With include_body (GET) the whole file is read into
        memory; without it (HEAD) only the headers are sent.

        Raises:
            OSError: If the file cannot be opened or read. The caller
                     turns this into 500 (or 408 for a timeout).
        """
        if not self.is_within_root(path):
            # An index file can be a symlink pointing out of the root
            raise PermissionError(f"Refusing to serve outside root: {path}")

        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            content = f.read() if include_body else None

        return ResponseBuilder().file(path, size, content).build()


def serve_static(root_dir: str | Path, **kwargs) -> StaticFileHandler:
    """
    Create a static file handler.

    Factory function for convenient handler creation.
    """
    return StaticFileHandler(root_dir, **kwargs)
