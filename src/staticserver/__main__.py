"""
=============================================================================
STATIC FILE SERVER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on port 1024
    python -m staticserver

    # Serve ./public on port 8000
    python -m staticserver -d public -p 8000

    # Standards-conforming line endings, one thread per connection
    python -m staticserver --crlf --threaded

Exit codes:
    0   help/version printed, or stopped with Ctrl+C
    1   could not start (invalid directory, invalid port, bind failure)

=============================================================================
"""

import argparse
import sys
from typing import Optional, Sequence

from . import __version__
from .config import ServerConfig, LOG_LEVELS
from .errors import InvalidDirectoryError
from .server import create_server


DESCRIPTION = f"""\
staticserver {__version__}
A simple static file server.

Serves the files under a directory over HTTP. Requesting a directory
without its trailing slash redirects to it; with the slash, its
index.html is served."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staticserver",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=__version__,
        help="Print version information and exit",
    )

    parser.add_argument(
        "-d", "--directory",
        metavar="<path>",
        default=None,
        help="The directory to serve (default: .)",
    )

    # Parsed by hand: argparse's own type errors exit with status 2
    parser.add_argument(
        "-p", "--port",
        metavar="<port>",
        default=None,
        help="The port on which the server should listen (default: 1024)",
    )

    parser.add_argument(
        "--host",
        metavar="<address>",
        default=None,
        help="The address to bind to (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--timeout",
        metavar="<seconds>",
        type=float,
        default=None,
        help="Per-connection read/write timeout (default: 1)",
    )

    parser.add_argument(
        "--threaded",
        action="store_true",
        help="Handle each connection on its own thread",
    )

    parser.add_argument(
        "--crlf",
        action="store_true",
        help="End response lines with CRLF instead of LF",
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS[:4],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser


def parse_port(value: Optional[str]) -> Optional[int]:
    """
    Parse a port number, or return None if it is not one.

    A missing value (None) parses as None too; callers check for the
    option being given before calling.
    """
    if value is None:
        return None
    try:
        port = int(value)
    except ValueError:
        return None
    if not 0 <= port <= 65535:
        return None
    return port


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns the process exit code. -h and -V exit from inside argparse
    with status 0.
    """
    args = build_parser().parse_args(argv)

    port = None
    if args.port is not None:
        port = parse_port(args.port)
        if port is None:
            print("Invalid port", file=sys.stderr)
            return 1

    # Command line beats environment beats defaults
    try:
        config = ServerConfig.from_env(
            root=args.directory,
            host=args.host,
            port=port,
            timeout=args.timeout,
            log_level=args.log_level,
            threaded=args.threaded or None,
            crlf=args.crlf or None,
        )
    except InvalidDirectoryError as e:
        print(e, file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    server = create_server(config)
    server.setup_logging()

    try:
        server.bind()
    except OSError as e:
        print(e, file=sys.stderr)
        return 1

    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
