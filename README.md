# tinyhttpd

A small multi-threaded HTTP/1.1 server. Each client connection is handled on
its own thread. Requests on a connection are served until the client
disconnects or sends a `Connection: close` header.

Only `GET` requests using `HTTP/1.1` are accepted. Requests with another
version are answered with `505 HTTP Version Not Supported`. Requests with
another method are answered with `405 Method Not Allowed`. Requests whose
request line is incomplete, and requests for unknown or unusable paths, are
answered with `400 Bad Request`. Every response is `text/plain`.

Each read from a connection takes at most 1024 bytes and is treated as one
request. Every response, headers included, is cut to at most 1023 characters.

## Endpoints

### `/calc/<op>/<a>/<b>`

Applies an integer operation to two 32-bit integers and returns the result
followed by a newline. `<op>` is one of `add`, `sub`, `mul` or `div`. Results
wrap to the signed 32-bit range, and division truncates toward zero. Division
by zero and unknown operators are bad requests. Text after the second number
is ignored.

    GET /calc/add/2/3 HTTP/1.1      ->  5
    GET /calc/div/7/2 HTTP/1.1      ->  3

### `/static/<file>`

Returns the bytes of `<file>` as two-digit hexadecimal values, each followed
by a space. The file is read from the `static` directory under the server's
root directory, which is the current working directory by default. The dump
is cut to at most 1023 characters. A path that contains `..`, or a file that
cannot be read, is a bad request.

## Running

Install the package, then start the server:

    tinyhttpd [-p <port>] [-v]

- `-p <port>`: listen on the given port (1–65535) on all interfaces. The
  default is 8080.
- `-v`: print received requests, the parsed fields and the responses sent.

Stop the server with Ctrl+C. Invalid arguments print a usage message and exit
with status 1.

Try it with:

    curl http://localhost:8080/calc/mul/6/7

## Use from Python

`tinyhttpd.server.serve(port, verbose, root)` runs the server until
interrupted. `root` sets the directory that holds `static`:

    from tinyhttpd.server import serve

    serve(8080, verbose=True, root="/srv/site")

The parts can also be used on their own:

    from tinyhttpd.request_parser import parse_request
    from tinyhttpd.process_request import process_request
    from tinyhttpd.responder import Status, create_response

    request = parse_request("GET /calc/sub/10/4 HTTP/1.1\r\n\r\n")
    body = process_request(request)              # "6\n"
    print(create_response(Status.OK, body, request.keep_alive))

`parse_request` raises `RequestError`, carrying the `Status` to answer with,
and `process_request` raises `InvalidPath` for paths it cannot serve.

## Limits

The server does not read request bodies, serve HTML or set content types other
than `text/plain`, and offers no TLS. Only the two endpoints above exist.

## Tests

    pip install .[test]
    pytest