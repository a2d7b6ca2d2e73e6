"""Per-IP request rate limiting with escalating lockouts."""

import threading
import time
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable, Optional

TIMEOUT = 1.0

LOCKED_ERROR = "locked"
TOO_MANY_ERROR = "too many requests, locked"
EMPTY_IP_ERROR = "empty ip"

WSGIApp = Callable[..., Iterable[bytes]]


class RateLimitError(Exception):
    """A request was refused; ``status`` is the HTTP status to answer with."""

    message = ""
    status = HTTPStatus.TOO_MANY_REQUESTS

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.message)


class EmptyIPError(RateLimitError):
    """The request had no client address."""

    message = EMPTY_IP_ERROR
    status = HTTPStatus.BAD_REQUEST


class LockedError(RateLimitError):
    """The client is locked out."""

    message = LOCKED_ERROR
    status = HTTPStatus.LOCKED


class TooManyRequestsError(RateLimitError):
    """The client went over its limit and has just been locked out."""

    message = TOO_MANY_ERROR
    status = HTTPStatus.TOO_MANY_REQUESTS


@dataclass
class Guest:
    """Request history of one client address."""

    tries: int = 0
    last_try: float = 0.0
    timeout: float = TIMEOUT
    locked: bool = False
    locks: int = 0


class RateLimiter:
    """Allows ``tries`` requests per ``period`` seconds; lockouts double each time."""

    def __init__(self, tries: int, period: float, timeout: float = TIMEOUT) -> None:
        self.tries = tries
        self.period = period
        self.timeout = timeout
        self._lock = threading.RLock()
        self._guests: Dict[str, Guest] = {}

    def allow(self, ip: str) -> None:
        """Record a request from ``ip``; raise a RateLimitError if it is refused."""
        if not ip:
            raise EmptyIPError()
        with self._lock:
            now = time.monotonic()
            guest = self._guests.get(ip)
            if guest is None:
                self._guests[ip] = Guest(last_try=now, timeout=self.timeout)
                return
            if guest.locked:
                raise LockedError()
            if now - guest.last_try >= self.period:
                guest.tries += 1
                guest.last_try = now
                return
            if guest.tries >= self.tries:
                self.lock_guest(ip, guest)
                raise TooManyRequestsError()
            guest.tries += 1

    def lock_guest(self, ip: str, guest: Guest) -> None:
        """Lock ``guest`` out; it is unlocked after its timeout, which then doubles."""
        with self._lock:
            guest.locked = True
            guest.locks += 1
            self._guests[ip] = guest
            timer = threading.Timer(guest.timeout, self._unlock, args=(guest,))
            timer.daemon = True
            timer.start()

    def _unlock(self, guest: Guest) -> None:
        with self._lock:
            guest.locked = False
            guest.tries = 0
            guest.timeout *= 2

    def middleware(self, app: WSGIApp) -> WSGIApp:
        """Wrap a WSGI app so refused requests get an error response."""

        def wrapped(environ: Dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
            try:
                self.allow(environ.get("REMOTE_ADDR", ""))
            except RateLimitError as exc:
                status = exc.status
                start_response(
                    f"{status.value} {status.phrase}",
                    [
                        ("Content-Type", "text/plain; charset=utf-8"),
                        ("X-Content-Type-Options", "nosniff"),
                    ],
                )
                return [(str(exc) + "\n").encode("utf-8")]
            return app(environ, start_response)

        return wrapped

    def check(self, environ: Dict[str, Any]) -> bool:
        """Return True if the request described by ``environ`` is allowed."""
        try:
            self.allow(environ.get("REMOTE_ADDR", ""))
        except RateLimitError:
            return False
        return True