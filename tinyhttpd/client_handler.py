"""Serving every request that arrives on one client connection."""

from __future__ import annotations

import sys
import threading
from typing import Optional

from tinyhttpd.process_request import PathLike, InvalidPath, process_request
from tinyhttpd.request_parser import RequestError, parse_request
from tinyhttpd.responder import MSG_MAX_SIZE, SEPARATOR, Client, Status, send_status


def _send(
    client: Client, status: Status, keep_alive: bool, body: Optional[str] = None
) -> None:
    try:
        send_status(client, status, keep_alive, body)
    except OSError as exc:
        print(f"write() failed: {exc}", file=sys.stderr)


def _serve_one(client: Client, text: str, root: Optional[PathLike]) -> bool:
    """Answer one request; return whether the connection stays open."""
    try:
        request = parse_request(text)
    except RequestError as err:
        if client.verbose:
            print(err.request)
        _send(client, err.status, err.request.keep_alive)
        return True

    if client.verbose:
        print(request)

    try:
        body = process_request(request, root)
    except InvalidPath as exc:
        if client.verbose:
            print(exc, file=sys.stderr)
        _send(client, Status.BAD_REQUEST, request.keep_alive)
    else:
        _send(client, Status.OK, request.keep_alive, body)
    return request.keep_alive


def handle_client(client: Client, root: Optional[PathLike] = None) -> None:
    """Read and answer requests until the client disconnects or asks to close.

    The connection is closed when this returns.
    """
    thread_id = threading.get_ident()
    connection = client.connection
    print(f"Client connected, handling in thread {thread_id}")
    try:
        while True:
            try:
                data = connection.recv(MSG_MAX_SIZE)
            except ConnectionError:
                print("Client disconnected")
                break
            except OSError as exc:
                print(f"read() failed: {exc}", file=sys.stderr)
                continue
            if not data:
                print("Client disconnected")
                break

            text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
            if client.verbose:
                print(f"Thread {thread_id} received:\n{text}", end="")
                if not text.endswith("\n"):
                    print()
                print(SEPARATOR)

            if not _serve_one(client, text, root):
                break
    finally:
        connection.close()
        print(f"Client FD closed (thread: {thread_id})")