"""WSGI middleware that refuses requests failing any of a set of checks."""

from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable

SUSPICIOUS_MESSAGE = "Suspicious activity detected"

CheckFunc = Callable[[Dict[str, Any]], bool]
WSGIApp = Callable[..., Iterable[bytes]]


class SusDetect:
    """Runs each check on the request environ, in order, before the app."""

    def __init__(self, *checks: CheckFunc) -> None:
        self.checks = list(checks)

    def middleware(self, app: WSGIApp) -> WSGIApp:
        """Wrap ``app``; a failing check answers 403 and stops further checks."""

        def wrapped(environ: Dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
            if all(check(environ) for check in self.checks):
                return app(environ, start_response)
            status = HTTPStatus.FORBIDDEN
            start_response(
                f"{status.value} {status.phrase}",
                [
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("X-Content-Type-Options", "nosniff"),
                ],
            )
            return [(SUSPICIOUS_MESSAGE + "\n").encode("utf-8")]

        return wrapped