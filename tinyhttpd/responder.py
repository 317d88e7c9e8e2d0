"""Building HTTP/1.1 responses and writing them to a client connection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Protocol

MSG_MAX_SIZE = 1024
VERSION = "HTTP/1.1"
DEFAULT_CONTENT_TYPE = "text/plain"
KEEP_CONNECTION = "keep-alive"
CLOSE_CONNECTION = "close"
SEPARATOR = "==================="


class Status(enum.Enum):
    """HTTP status codes the server answers with, with their reason phrases."""

    OK = (200, "OK")
    BAD_REQUEST = (400, "Bad Request")
    METHOD_NOT_ALLOWED = (405, "Method Not Allowed")
    VERSION_NOT_SUPPORTED = (505, "HTTP Version Not Supported")

    def __init__(self, code: int, phrase: str) -> None:
        self.code = code
        self.phrase = phrase


class _Connection(Protocol):
    def sendall(self, data: bytes) -> None: ...


@dataclass
class Client:
    """A connected client and whether traffic with it is echoed to stdout."""

    connection: _Connection
    verbose: bool = False


def create_response(
    status: Status,
    body: Optional[str] = None,
    keep_alive: bool = True,
    content_type: Optional[str] = None,
) -> str:
    """Build a complete response, limited to MSG_MAX_SIZE - 1 characters."""
    body_text = body if body is not None else ""
    length = min(len(body_text), MSG_MAX_SIZE)
    response = (
        f"{VERSION} {status.code} {status.phrase}\r\n"
        f"Content-Type: {content_type or DEFAULT_CONTENT_TYPE}\r\n"
        f"Content-Length: {length}\r\n"
        f"Connection: {KEEP_CONNECTION if keep_alive else CLOSE_CONNECTION}\r\n"
        "\r\n"
        f"{body_text}"
    )
    return response[: MSG_MAX_SIZE - 1]


def send_response(client: Client, response: str) -> None:
    """Write a response to the client; OSError from the connection propagates."""
    if client.verbose:
        print(f"Sending response to client:\n{response}")
        print(SEPARATOR)
    client.connection.sendall(response[:MSG_MAX_SIZE].encode("utf-8"))


def send_status(
    client: Client,
    status: Status,
    keep_alive: bool = True,
    body: Optional[str] = None,
) -> None:
    """Build a plain-text response with the given status and send it."""
    send_response(client, create_response(status, body, keep_alive))