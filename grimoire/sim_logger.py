"""A synchronous logger that prints, caches and streams each entry as it is made."""

import contextlib
import queue
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from grimoire import uid
from grimoire.cache import Cache
from grimoire.levels import Level, level_from_string
from grimoire.logger import Log, LoggerConfig, Pagination
from grimoire.repo import Repo

SOURCE_ID_LEN = 8

_CLOSED = object()


def _rfc3339_now() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


class _Counter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class _Outbox:
    """Output stream shared by a logger and its children."""

    def __init__(self) -> None:
        self.queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self.closed = False

    def put(self, entry: Log) -> None:
        with self._lock:
            if self.closed:
                raise RuntimeError("logger is closed")
            self.queue.put(entry)

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            self.queue.put(_CLOSED)


class SimLogger:
    """Logs entries at or above ``level``; children share its cache, counter and output."""

    def __init__(
        self,
        service: str,
        *,
        level: Level = Level.NULL,
        directory: Union[str, Path] = ".",
        _cache: Optional[Cache[Log]] = None,
        _counter: Optional[_Counter] = None,
        _outbox: Optional[_Outbox] = None,
    ) -> None:
        self._service = service
        self.level = level
        self._cache: Cache[Log] = (
            _cache
            if _cache is not None
            else Cache(service, directory=directory, encode=Log.to_dict, decode=Log.from_dict)
        )
        self._counter = _counter if _counter is not None else _Counter()
        self._outbox = _outbox if _outbox is not None else _Outbox()
        self._services: Repo[str, "SimLogger"] = Repo()

    def new_service_logger(self, config: LoggerConfig) -> "SimLogger":
        """Return a logger for ``config.service_name`` sharing this one's state."""
        return SimLogger(
            config.service_name,
            level=self.level,
            _cache=self._cache,
            _counter=self._counter,
            _outbox=self._outbox,
        )

    def service_name(self) -> str:
        """Return the name stamped on entries."""
        return self._service

    def messages(self, pagination: Pagination) -> List[Log]:
        """Return every cached entry, or an empty list if the page is out of range."""
        start = (pagination.page - 1) * pagination.amount
        total = self._cache.flush_len() * self._cache.capacity + self._cache.length()
        if start < 0 or start >= total:
            return []
        return self._cache.read_all(self._service)

    def services(self) -> Dict[str, "SimLogger"]:
        """Return the registered child loggers."""
        return self._services.all()

    def output(self, handler: Optional[Callable[[Log], Any]]) -> None:
        """Pass each streamed entry to ``handler`` until the logger closes.

        If the handler raises, the error is logged and streaming stops.
        """
        while True:
            entry = self._outbox.queue.get()
            if entry is _CLOSED:
                self._outbox.queue.put(_CLOSED)
                return
            if handler is None:
                continue
            try:
                handler(entry)
            except Exception as exc:
                with contextlib.suppress(RuntimeError):
                    self.error(str(exc))
                return

    def println(self, *args: Any) -> None:
        """Print the arguments to standard output."""
        print(*args)

    def printf(self, fmt: str, *args: Any) -> None:
        """Write ``fmt`` formatted with ``args`` to standard output."""
        sys.stdout.write(fmt % args if args else fmt)

    def log(self, level: Level, msg: str, *args: Any) -> Optional[Log]:
        """Print, cache and stream an entry; entries below ``self.level`` are dropped."""
        if level < self.level:
            return None
        if self._outbox.closed:
            raise RuntimeError("logger is closed")
        entry = Log(
            id=self._counter.increment(),
            source_id=uid.new_uid(SOURCE_ID_LEN),
            timestamp=_rfc3339_now(),
            level=level.label(),
            service=self._service,
            msg=msg,
            data=list(args),
        )
        sys.stdout.write(str(entry) + "\n")
        self._cache.write(entry)
        self._outbox.put(entry)
        return entry

    def trace(self, info: str, *args: Any) -> Optional[Log]:
        """Log a tracing message."""
        return self.log(Level.TRACE, info, *args)

    def info(self, info: str, *args: Any) -> Optional[Log]:
        """Log an informational message."""
        return self.log(Level.INFO, info, *args)

    def debug(self, info: str, *args: Any) -> Optional[Log]:
        """Log a diagnostic message."""
        return self.log(Level.DEBUG, info, *args)

    def warn(self, info: str, *args: Any) -> Optional[Log]:
        """Log a warning."""
        return self.log(Level.WARN, info, *args)

    def error(self, message: str, *args: Any) -> str:
        """Log an error and return its message."""
        self.log(Level.ERROR, message, *args)
        return message

    def fatal(self, info: str) -> Optional[Log]:
        """Log a fatal message."""
        return self.log(Level.FATAL, info)

    def total_sent(self) -> int:
        """Return how many entries this logger family has produced."""
        return self._counter.value

    def batch_logs(self, *args: Log) -> None:
        """Log ready-made entries again under this logger's name."""
        for entry in args:
            self.log(level_from_string(entry.level), entry.msg, *entry.data)

    def close(self) -> None:
        """Close child loggers and end the output stream."""

        def close_service(name: str, service: "SimLogger") -> None:
            service.close()
            self._services.delete(name)

        self._services.iterate(close_service)
        self._outbox.close()