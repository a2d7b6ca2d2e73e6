"""A logger that writes every entry straight to standard output."""

import sys
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from grimoire import uid
from grimoire.levels import Level
from grimoire.logger import Log, LoggerConfig, Pagination
from grimoire.repo import Repo

SOURCE_ID_LEN = 8


def _rfc3339_now() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


class StdOutLogger:
    """Prints entries as they are made; keeps no cache and streams nothing."""

    def __init__(
        self,
        service: str,
        *,
        _start: int = 0,
        _logs: Optional[List[Log]] = None,
    ) -> None:
        self._service = service
        self._lock = threading.Lock()
        self._total_sent = _start
        self._logs: List[Log] = _logs if _logs is not None else []
        self._services: Repo[str, "StdOutLogger"] = Repo()

    def log(self, level: Level, msg: str, *args: Any) -> Log:
        """Build an entry at ``level``, print it and return it."""
        with self._lock:
            self._total_sent += 1
            entry_id = self._total_sent
        entry = Log(
            id=entry_id,
            source_id=uid.new_uid(SOURCE_ID_LEN),
            timestamp=_rfc3339_now(),
            level=level.label(),
            service=self._service,
            msg=msg,
            data=list(args),
        )
        sys.stdout.write(str(entry) + "\n")
        return entry

    def trace(self, info: str, *args: Any) -> Log:
        """Log a tracing message."""
        return self.log(Level.TRACE, info, *args)

    def info(self, info: str, *args: Any) -> Log:
        """Log an informational message."""
        return self.log(Level.INFO, info, *args)

    def debug(self, info: str, *args: Any) -> Log:
        """Log a diagnostic message."""
        return self.log(Level.DEBUG, info, *args)

    def warn(self, info: str, *args: Any) -> Log:
        """Log a warning."""
        return self.log(Level.WARN, info, *args)

    def error(self, message: str, *args: Any) -> str:
        """Log an error and return its message."""
        self.log(Level.ERROR, message, *args)
        return message

    def fatal(self, info: str) -> Log:
        """Log a fatal message."""
        return self.log(Level.FATAL, info)

    def service_name(self) -> str:
        """Return the name stamped on entries."""
        return self._service

    def messages(self, pagination: Pagination) -> List[Log]:
        """Return the kept entries; this logger keeps none of its own."""
        return self._logs

    def new_service_logger(self, config: LoggerConfig) -> "StdOutLogger":
        """Return the child registered under ``config.service_name``, creating it if needed.

        The child prints under this logger's name and counts on from its current total.
        """
        child = StdOutLogger(self._service, _start=self.total_sent(), _logs=self._logs)
        self._services.add(config.service_name, child)
        return self._services.get(config.service_name)

    def services(self) -> Dict[str, "StdOutLogger"]:
        """Return the child loggers by their configured names."""
        return self._services.all()

    def println(self, *args: Any) -> None:
        """Print the arguments to standard output."""
        print(*args)

    def printf(self, fmt: str, *args: Any) -> None:
        """Write ``fmt`` formatted with ``args`` to standard output."""
        sys.stdout.write(fmt % args if args else fmt)

    def total_sent(self) -> int:
        """Return how many entries this logger has produced."""
        with self._lock:
            return self._total_sent

    def batch_logs(self, *args: Log) -> None:
        """Ignore ready-made entries; this logger only prints its own."""

    def output(self, handler: Optional[Callable[[Log], Any]]) -> None:
        """Return at once; this logger has no output stream."""

    def close(self) -> None:
        """Nothing to release."""