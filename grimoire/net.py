"""Network helpers: connection retries and WSGI middleware chaining."""

import functools
import socket
import time
from typing import Any, Callable, TypeVar

R = TypeVar("R")

INITIAL_DELAY = 1.0

WSGIApp = Callable[..., Any]
Middleware = Callable[[WSGIApp], WSGIApp]


def try_connection(
    host: str,
    port: int,
    attempts: int,
    success: Callable[[socket.socket], R],
) -> R:
    """Connect over TCP, retrying with doubling delays, and pass the socket to ``success``.

    The caller owns the socket. Raises ConnectionError once every attempt fails.
    """
    delay = INITIAL_DELAY
    for attempt in range(attempts):
        try:
            conn = socket.create_connection((host, port))
        except OSError:
            if attempt != attempts - 1:
                time.sleep(delay)
                delay *= 2
            continue
        return success(conn)
    raise ConnectionError("could not connect")


def chain_middleware(app: WSGIApp, *args: Middleware) -> WSGIApp:
    """Wrap ``app`` so that the first middleware given runs outermost."""
    return functools.reduce(lambda inner, middleware: middleware(inner), reversed(args), app)