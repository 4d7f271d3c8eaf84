"""
Request handlers.

StaticFileHandler owns everything that touches the served directory:
resolving resources to paths, enforcing that they stay under the root,
and reading files into responses.
"""

from .static import StaticFileHandler, ResolvedTarget, serve_static

__all__ = [
    "StaticFileHandler",
    "ResolvedTarget",
    "serve_static",
]
