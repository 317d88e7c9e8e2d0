"""Serving the /calc and /static paths of a parsed request."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from tinyhttpd.request_parser import Request
from tinyhttpd.responder import MSG_MAX_SIZE

CALC_DIR = "/calc"
STATIC_DIR = "/static"

_OPERATOR = re.compile(r"\s*(\S{1,3})")
_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")
_PATH_COMPONENT = re.compile(r"\s*(\S+)")

PathLike = Union[str, "os.PathLike[str]"]


class InvalidPath(Exception):
    """The requested path cannot be served; the client gets a Bad Request."""


def _int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    return (value + 2**31) % 2**32 - 2**31


def _divide(num1: int, num2: int) -> int:
    if num2 == 0:
        raise InvalidPath("Division by zero")
    quotient = abs(num1) // abs(num2)
    return -quotient if (num1 < 0) != (num2 < 0) else quotient


_OPERATIONS: Dict[str, Callable[[int, int], int]] = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": _divide,
}


def hex_dump(data: bytes, max_size: int = MSG_MAX_SIZE) -> str:
    """Render bytes as two-digit hex values each followed by a space.

    The result holds at most ``max_size - 1`` characters.
    """
    dump = "".join(f"{byte:02x} " for byte in data)
    return dump[: max(max_size - 1, 0)]


def read_static(path: str, root: Optional[PathLike] = None) -> str:
    """Return a hex dump of the file a '/static' path names under ``root``.

    ``root`` defaults to the current working directory. Raises InvalidPath
    when the path names nothing, climbs out with '..' or cannot be read.
    """
    if not path.startswith(STATIC_DIR):
        raise InvalidPath(f"{path} is not a valid path")
    match = _PATH_COMPONENT.match(path, len(STATIC_DIR))
    if match is None:
        raise InvalidPath(f"{path} is not a valid path")
    requested = match.group(1)
    if ".." in requested:
        raise InvalidPath(
            "Detected request to access from above static directory"
        )
    base = os.fspath(root) if root is not None else os.getcwd()
    file_path = base + STATIC_DIR + requested
    try:
        data = Path(file_path).read_bytes()
    except OSError as exc:
        raise InvalidPath(f"Error opening file: {file_path}") from exc
    return hex_dump(data)


def calculate(path: str) -> str:
    """Evaluate '/calc/<op>/<num1>/<num2>' and return the result and a newline.

    Operators are add, sub, mul and div; numbers are 32-bit integers and
    division truncates toward zero. Text after the second number is ignored.
    """
    prefix = CALC_DIR + "/"
    if not path.startswith(prefix):
        raise InvalidPath(f"{path} is not a valid calc path")
    op_match = _OPERATOR.match(path, len(prefix))
    if op_match is None:
        raise InvalidPath(f"{path} has no operator")
    operator = op_match.group(1)
    position = op_match.end()

    numbers = []
    for _ in range(2):
        if not path.startswith("/", position):
            raise InvalidPath(f"{path} is not a valid calc path")
        number_match = _INTEGER.match(path, position + 1)
        if number_match is None:
            raise InvalidPath(f"{path} is not a valid calc path")
        numbers.append(_int32(int(number_match.group(1))))
        position = number_match.end()

    operation = _OPERATIONS.get(operator)
    if operation is None:
        raise InvalidPath(f"Unknown operator: {operator}")
    return f"{_int32(operation(*numbers))}\n"


def process_request(request: Request, root: Optional[PathLike] = None) -> str:
    """Return the response body for a '/calc' or '/static' request."""
    if request.path.startswith(CALC_DIR):
        return calculate(request.path)
    if request.path.startswith(STATIC_DIR):
        return read_static(request.path, root)
    raise InvalidPath(f"Invalid path: {request.path}")