"""Parsing the request line and Connection header of an HTTP/1.1 request."""

from __future__ import annotations

import re
from dataclasses import dataclass

from tinyhttpd.responder import (
    CLOSE_CONNECTION,
    KEEP_CONNECTION,
    VERSION,
    Status,
)

GET_METHOD = "GET"
_CONNECTION_HEADER = "Connection: "
_LINE_BREAKS = re.compile(r"[\r\n]+")


@dataclass
class Request:
    """The parts of a client request the server acts on."""

    method: str = ""
    path: str = ""
    version: str = ""
    keep_alive: bool = True

    def __str__(self) -> str:
        connection = KEEP_CONNECTION if self.keep_alive else CLOSE_CONNECTION
        return (
            "Parsed request data:\n"
            f"method: {self.method}\n"
            f"path: {self.path}\n"
            f"ver: {self.version}\n"
            f"connection: {connection}"
        )


class RequestError(Exception):
    """A request that cannot be served; carries the status to answer with."""

    def __init__(self, status: Status, request: Request) -> None:
        super().__init__(f"{status.code} {status.phrase}")
        self.status = status
        self.request = request


def connection_keep_alive(text: str) -> bool:
    """Return False only if some line is exactly 'Connection: close'."""
    for line in _LINE_BREAKS.split(text):
        if (
            line.startswith(_CONNECTION_HEADER)
            and line[len(_CONNECTION_HEADER):] == CLOSE_CONNECTION
        ):
            return False
    return True


def parse_request(text: str) -> Request:
    """Parse method, path, version and connection state.

    Raises RequestError when the request line is incomplete, the version is
    not HTTP/1.1 or the method is not GET. The request attached to the error
    holds whatever was parsed and never asks to keep the connection alive.
    """
    tokens = text.split(maxsplit=3)[:3]
    request = Request(*tokens, keep_alive=False)
    if len(tokens) != 3:
        raise RequestError(Status.BAD_REQUEST, request)
    if request.version != VERSION:
        raise RequestError(Status.VERSION_NOT_SUPPORTED, request)
    if request.method != GET_METHOD:
        raise RequestError(Status.METHOD_NOT_ALLOWED, request)
    request.keep_alive = connection_keep_alive(text)
    return request