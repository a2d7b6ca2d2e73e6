import socket
from unittest import mock

import pytest

from grimoire.net import INITIAL_DELAY, chain_middleware, try_connection


def _closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_try_connection_success():
    with socket.socket() as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]

        def on_connect(conn):
            with conn:
                return conn.getpeername()[1]

        assert try_connection("127.0.0.1", port, 3, on_connect) == port


def test_try_connection_gives_up_without_sleep_on_single_attempt():
    port = _closed_port()
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(ConnectionError, match="could not connect"):
            try_connection("127.0.0.1", port, 1, lambda conn: conn)
    assert sleep.call_count == 0


def test_try_connection_backs_off():
    port = _closed_port()
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(ConnectionError):
            try_connection("127.0.0.1", port, 3, lambda conn: conn)
    delays = [call.args[0] for call in sleep.call_args_list]
    assert delays == [INITIAL_DELAY, INITIAL_DELAY * 2]


def _tagging(name):
    def middleware(app):
        def wrapped(environ, start_response):
            environ.setdefault("order", []).append(name)
            return app(environ, start_response)

        return wrapped

    return middleware


def _app(environ, start_response):
    environ.setdefault("order", []).append("app")
    start_response("200 OK", [])
    return [b"ok"]


def test_chain_middleware_order():
    chained = chain_middleware(_app, _tagging("first"), _tagging("second"))
    environ = {}
    body = chained(environ, lambda status, headers: None)
    assert body == [b"ok"]
    assert environ["order"] == ["first", "second", "app"]


def test_chain_middleware_without_middlewares():
    assert chain_middleware(_app) is _app