import socket
import threading
import time

import pytest

from tinyhttpd.process_request import calculate
from tinyhttpd.responder import Client, Status, create_response
from tinyhttpd.server import (
    DEFAULT_PORT,
    PORT_ERROR,
    USAGE,
    ArgumentError,
    create_server,
    main,
    parse_args,
    serve,
)


def test_parse_args_defaults():
    assert parse_args([]) == (DEFAULT_PORT, False)


def test_parse_args_port_and_verbose():
    assert parse_args(["-p", "9000", "-v"]) == (9000, True)
    assert parse_args(["-v", "-p", "9001"]) == (9001, True)


def test_parse_args_port_with_trailing_text():
    assert parse_args(["-p", "8081abc"]) == (8081, False)


@pytest.mark.parametrize(
    "argv",
    [
        ["-v", "-v"],
        ["x"],
        ["-p"],
        ["-p", "80", "-p"],
        ["-p", "80", "-v", "extra"],
        ["-vv"],
        ["80"],
    ],
)
def test_parse_args_usage_errors(argv):
    with pytest.raises(ArgumentError) as info:
        parse_args(argv)
    assert info.value.show_usage


@pytest.mark.parametrize(
    "argv", [["-p", "0"], ["-p", "65536"], ["-p", "abc"], ["-p", "-v"]]
)
def test_parse_args_port_errors(argv):
    with pytest.raises(ArgumentError) as info:
        parse_args(argv)
    assert not info.value.show_usage
    assert str(info.value) == PORT_ERROR


def test_main_usage_error(capsys):
    assert main(["-x"]) == 1
    assert USAGE in capsys.readouterr().err


def test_main_port_error(capsys):
    assert main(["-p", "70000"]) == 1
    assert PORT_ERROR in capsys.readouterr().err


def test_create_server_listens():
    server = create_server(0)
    try:
        port = server.getsockname()[1]
        assert port > 0
        with socket.create_connection(("127.0.0.1", port), timeout=5) as conn:
            accepted, _ = server.accept()
            accepted.close()
            assert conn.getpeername()[1] == port
    finally:
        server.close()


def test_create_server_port_in_use():
    first = create_server(0)
    try:
        port = first.getsockname()[1]
        with pytest.raises(OSError):
            create_server(port)
    finally:
        first.close()


def _free_port():
    with socket.socket() as probe:
        probe.bind(("", 0))
        return probe.getsockname()[1]


def _connect(port):
    deadline = time.monotonic() + 5
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=5)
        except OSError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.05)


def test_serve_answers_over_tcp(tmp_path):
    port = _free_port()
    thread = threading.Thread(target=serve, args=(port, False, tmp_path), daemon=True)
    thread.start()
    with _connect(port) as conn:
        conn.sendall(b"GET /calc/sub/10/4 HTTP/1.1\r\nConnection: close\r\n\r\n")
        received = b""
        while True:
            chunk = conn.recv(4096)
            if not chunk:
                break
            received += chunk
    assert received.decode() == create_response(
        Status.OK, calculate("/calc/sub/10/4"), keep_alive=False
    )