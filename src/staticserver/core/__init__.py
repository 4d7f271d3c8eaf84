"""
Networking core: the listening socket and the per-client connection.
"""

from .connection import Connection
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "SocketServer",
]
