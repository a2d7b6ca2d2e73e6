from grimoire.susdetect import SUSPICIOUS_MESSAGE, SusDetect


def _call(app, environ):
    captured = {}

    def start_response(status, headers):
        captured["status"] = status

    body = b"".join(app(environ, start_response))
    return captured["status"], body


def _app(calls):
    def app(environ, start_response):
        calls.append(environ.get("PATH_INFO"))
        start_response("200 OK", [])
        return [b"ok"]

    return app


def test_passes_when_all_checks_succeed():
    calls = []
    detector = SusDetect(lambda env: True, lambda env: env["PATH_INFO"] == "/")
    status, body = _call(detector.middleware(_app(calls)), {"PATH_INFO": "/"})
    assert status == "200 OK"
    assert body == b"ok"
    assert calls == ["/"]


def test_blocks_on_failed_check():
    calls = []
    detector = SusDetect(lambda env: env["PATH_INFO"] != "/admin")
    status, body = _call(detector.middleware(_app(calls)), {"PATH_INFO": "/admin"})
    assert status.startswith("403")
    assert body == (SUSPICIOUS_MESSAGE + "\n").encode()
    assert calls == []


def test_stops_at_first_failure():
    seen = []

    def failing(env):
        seen.append("first")
        return False

    def never(env):
        seen.append("second")
        return True

    detector = SusDetect(failing, never)
    status, _ = _call(detector.middleware(_app([])), {"PATH_INFO": "/"})
    assert status.startswith("403")
    assert seen == ["first"]


def test_no_checks_passes_through():
    calls = []
    status, body = _call(SusDetect().middleware(_app(calls)), {"PATH_INFO": "/x"})
    assert status == "200 OK"
    assert calls == ["/x"]