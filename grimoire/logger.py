"""A threaded logger with per-service child loggers, output streams and caching."""

import contextlib
import queue
import sys
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from grimoire import uid
from grimoire.cache import CURRENT_LEN, Cache
from grimoire.levels import Level
from grimoire.names import new_last_name
from grimoire.repo import Repo

TIMESTAMP_FORMAT = "%m-%d-%Y_%I-%M-%S"
RUN_ID_LEN = 8
SOURCE_ID_LEN = 8

_CLOSED = object()


@dataclass
class Log:
    """One log entry."""

    id: int = 0
    source_id: str = ""
    service: str = ""
    level: str = ""
    msg: str = ""
    data: List[Any] = field(default_factory=list)
    timestamp: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the entry as a JSON-ready mapping."""
        result: Dict[str, Any] = {
            "id": self.id,
            "sid": self.source_id,
            "serv": self.service,
            "lvl": self.level,
            "msg": self.msg,
            "time": self.timestamp,
        }
        if self.data:
            result["data"] = list(self.data)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Log":
        """Build an entry from a mapping made by ``to_dict``."""
        return cls(
            id=data.get("id", 0),
            source_id=data.get("sid", ""),
            service=data.get("serv", ""),
            level=data.get("lvl", ""),
            msg=data.get("msg", ""),
            data=list(data.get("data") or []),
            timestamp=data.get("time", ""),
        )

    def __str__(self) -> str:
        return f"[{self.id}] {self.timestamp} {self.level} [ {self.service} ] ==> {self.msg}"


@dataclass
class Pagination:
    """A page of ``amount`` entries; pages start at 1."""

    page: int = 1
    amount: int = CURRENT_LEN


@dataclass
class LoggerConfig:
    """Settings for a Logger."""

    service_name: str = ""
    can_print: bool = False
    can_output: bool = False
    persist: bool = False
    directory: Optional[Union[str, Path]] = None


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


class Logger:
    """Processes log entries on a worker thread, caching, printing and streaming them.

    Entries from a service logger are also streamed to its parent's output.
    """

    def __init__(
        self,
        config: LoggerConfig,
        *,
        _run_id: Optional[str] = None,
        _counter: Optional[_Counter] = None,
        _parent: Optional["Logger"] = None,
    ) -> None:
        self._run_id = _run_id if _run_id is not None else uid.new_uid(RUN_ID_LEN)
        self._counter = _counter if _counter is not None else _Counter()
        if _parent is None:
            self._service = f"{config.service_name}_{self._run_id}"
            directory = config.directory if config.directory is not None else "."
            self._parent_out: Optional["queue.Queue[Any]"] = None
        else:
            self._service = new_last_name(config.service_name)
            directory = config.directory if config.directory is not None else _parent._directory
            self._parent_out = _parent._out
        self._directory = Path(directory)

        self.can_print = config.can_print
        self.can_output = config.can_output
        self.persist = config.persist

        self._cache: Cache[Log] = Cache(
            config.service_name,
            self._run_id,
            directory=self._directory,
            encode=Log.to_dict,
            decode=Log.from_dict,
        )
        self._services: Repo[str, "Logger"] = Repo()
        self._in: "queue.Queue[Any]" = queue.Queue()
        self._out: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._closing = False
        self._closed = False
        self._worker = threading.Thread(
            target=self._process, name=f"logger-{self._service}", daemon=True
        )
        self._worker.start()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def new_service_logger(self, config: LoggerConfig) -> "Logger":
        """Create a child logger named after ``config.service_name``."""
        if self._services.has(config.service_name):
            message = self.error(f"service logger {config.service_name} already existed")
            raise ValueError(message)
        service = Logger(config, _run_id=self._run_id, _counter=self._counter, _parent=self)
        self._services.add(config.service_name, service)
        return service

    def service_name(self) -> str:
        """Return the name this logger stamps on its entries."""
        return self._service

    def services(self) -> Dict[str, "Logger"]:
        """Return the child loggers by their configured names."""
        return self._services.all()

    def trace(self, info: str, *args: Any) -> None:
        """Log a tracing message."""
        self._new_msg(info, Level.TRACE, args)

    def info(self, info: str, *args: Any) -> None:
        """Log an informational message."""
        self._new_msg(info, Level.INFO, args)

    def debug(self, step: str, *args: Any) -> None:
        """Log a diagnostic message."""
        self._new_msg(step, Level.DEBUG, args)

    def warn(self, warning: str, *args: Any) -> None:
        """Log a warning."""
        self._new_msg(warning, Level.WARN, args)

    def error(self, message: str, *args: Any) -> str:
        """Log an error and return its message."""
        self._new_msg(message, Level.ERROR, args)
        return message

    def fatal(self, breakage: str) -> None:
        """Log a fatal message together with the current stack."""
        stack = "".join(traceback.format_stack())
        self._new_msg(breakage + "\n" + stack, Level.FATAL, ())

    def println(self, *args: Any) -> None:
        """Print the arguments to standard output."""
        print(*args)

    def printf(self, fmt: str, *args: Any) -> None:
        """Write ``fmt`` formatted with ``args`` to standard output."""
        sys.stdout.write(fmt % args if args else fmt)

    def messages(self, pagination: Pagination) -> List[Log]:
        """Return one page of cached entries, once pending entries are processed."""
        self._in.join()
        start = (pagination.page - 1) * pagination.amount
        end = start + pagination.amount
        total = self._cache.flush_len() * self._cache.capacity + self._cache.length()
        end = min(end, total)
        if start < 0 or start >= total:
            return []
        return self._cache.read_all(self._cache.app_name)[start:end]

    def batch_logs(self, *args: Log) -> None:
        """Feed ready-made entries through this logger."""
        with self._lock:
            if self._closed:
                raise RuntimeError("logger is closed")
            for entry in args:
                self._in.put(entry)

    def output(self, handler: Optional[Callable[[Log], Any]]) -> None:
        """Pass each output entry to ``handler`` until the logger closes.

        If the handler raises, the error is logged and streaming stops.
        """
        while True:
            entry = self._out.get()
            if entry is _CLOSED:
                self._out.put(_CLOSED)
                return
            if handler is None:
                continue
            try:
                handler(entry)
            except Exception as exc:
                with contextlib.suppress(RuntimeError):
                    self.error(str(exc))
                return

    def total_sent(self) -> int:
        """Return how many entries this logger family has produced."""
        return self._counter.value

    def close(self) -> None:
        """Close child loggers, drain pending entries, end output and flush the cache."""
        with self._lock:
            if self._closing:
                return
            self._closing = True

        def close_service(name: str, service: "Logger") -> None:
            service.close()
            self._services.delete(name)

        self._services.iterate(close_service)

        with self._lock:
            self._closed = True
            self._in.put(_CLOSED)
        self._worker.join()
        self._out.put(_CLOSED)
        self._cache.flush()

    def _new_msg(self, msg: str, level: Level, data: tuple) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("logger is closed")
            self._in.put(
                Log(
                    id=self._counter.increment(),
                    source_id=uid.new_uid(SOURCE_ID_LEN),
                    timestamp=datetime.now().strftime(TIMESTAMP_FORMAT),
                    level=level.label(),
                    service=self._service,
                    msg=msg,
                    data=list(data),
                )
            )

    def _process(self) -> None:
        while True:
            entry = self._in.get()
            try:
                if entry is _CLOSED:
                    return
                self._handle(entry)
            except Exception:
                traceback.print_exc()
            finally:
                self._in.task_done()

    def _handle(self, entry: Log) -> None:
        if self.persist:
            if self._cache.is_full():
                self._cache.flush()
            self._cache.write(entry)
        if self.can_print:
            sys.stdout.write(str(entry) + "\n")
        if self.can_output:
            self._out.put(entry)
            if self._parent_out is not None:
                self._parent_out.put(entry)