"""Command-line entry point: a threaded TCP server for the HTTP handler."""

from __future__ import annotations

import re
import socket
import sys
import threading
from typing import List, Optional, Sequence, Tuple

from tinyhttpd.client_handler import handle_client
from tinyhttpd.process_request import PathLike
from tinyhttpd.responder import Client

DEFAULT_PORT = 8080
MAX_CONNECT_REQUESTS = 5
MAX_ARGS = 3
PORT_ARG = "-p"
VERBOSE_ARG = "-v"

USAGE = (
    "Usage: tinyhttpd [-p <port>] [-v]\n"
    "   -p: Use a user-specified port number\n"
    "   -v: Print messages received from the client to the terminal"
)
PORT_ERROR = "Port number invalid or out of range"

_PORT_NUMBER = re.compile(r"\s*([+-]?[0-9]+)")


class ArgumentError(Exception):
    """Invalid command-line arguments; ``show_usage`` tells how to report it."""

    def __init__(self, message: str, show_usage: bool) -> None:
        super().__init__(message)
        self.show_usage = show_usage


def _usage_error() -> ArgumentError:
    return ArgumentError(USAGE, show_usage=True)


def parse_args(argv: Sequence[str]) -> Tuple[int, bool]:
    """Return (port, verbose) from arguments, program name excluded."""
    args: List[str] = list(argv)
    if len(args) > MAX_ARGS:
        raise _usage_error()

    port = DEFAULT_PORT
    verbose = False
    port_found = False
    for index, arg in enumerate(args):
        if arg == PORT_ARG:
            if port_found or index + 1 >= len(args):
                raise _usage_error()
            match = _PORT_NUMBER.match(args[index + 1])
            if match is None:
                raise ArgumentError(PORT_ERROR, show_usage=False)
            port = int(match.group(1))
            if not 0 < port <= 65535:
                raise ArgumentError(PORT_ERROR, show_usage=False)
            port_found = True
        elif arg == VERBOSE_ARG:
            if verbose:
                raise _usage_error()
            verbose = True
        elif index == 0 or args[index - 1] != PORT_ARG:
            raise _usage_error()
    return port, verbose


def create_server(port: int) -> socket.socket:
    """Create a TCP socket bound to all interfaces and listening on ``port``."""
    print("Creating socket...")
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        print("Initializing server address...")
        address = ("", port)
        print(f"Server address initialized (port {port})")
        print("Binding socket to address...")
        server.bind(address)
        print("Setting up server to listen for connections...")
        server.listen(MAX_CONNECT_REQUESTS)
    except OSError:
        server.close()
        raise
    return server


def serve(
    port: int = DEFAULT_PORT,
    verbose: bool = False,
    root: Optional[PathLike] = None,
) -> None:
    """Accept connections forever, each served on its own thread.

    Returns after a KeyboardInterrupt, closing the listening socket.
    """
    server = create_server(port)
    try:
        while True:
            try:
                connection, _ = server.accept()
            except OSError as exc:
                print(f"accept() failed: {exc}", file=sys.stderr)
                continue
            thread = threading.Thread(
                target=handle_client,
                args=(Client(connection, verbose), root),
                daemon=True,
            )
            try:
                thread.start()
            except RuntimeError as exc:
                print(f"Thread creation failed: {exc}", file=sys.stderr)
                connection.close()
                continue
            print(f"Thread {thread.ident} created")
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
        print("\nServer FD closed")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the server from command-line arguments; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        port, verbose = parse_args(args)
    except ArgumentError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        serve(port, verbose)
    except OSError as exc:
        print(f"Server setup failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())