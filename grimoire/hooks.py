"""Named event hooks dispatched on a background thread."""

import queue
import threading
import traceback
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union

from grimoire.repo import Repo

T = TypeVar("T")

_CLOSED = object()


class Hook(str, Enum):
    """Kinds of connection events."""

    CONNECT = "connect"
    DISCONNECT = "disconnect"


class Hooks(Generic[T]):
    """Runs the handler registered for each enqueued hook, passing it ``data``."""

    def __init__(self, data: T) -> None:
        self._data = data
        self._handlers: Repo[Union[Hook, str], Callable[[T], Any]] = Repo()
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._worker = threading.Thread(target=self._listen, name="hooks", daemon=True)
        self._worker.start()

    def __enter__(self) -> "Hooks[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def on_hook(self, hook: Union[Hook, str], handler: Callable[[T], Any]) -> None:
        """Register ``handler`` for ``hook``; the first registration wins."""
        self._handlers.add(hook, handler)

    def enqueue_hook(self, hook: Union[Hook, str]) -> None:
        """Schedule the handler of ``hook``; the handler is looked up when it runs."""
        with self._lock:
            if self._closed:
                raise RuntimeError("hooks are closed")
            self._queue.put(hook)

    def close(self) -> None:
        """Run the hooks already enqueued, then stop the dispatcher."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)
        if threading.current_thread() is not self._worker:
            self._worker.join()

    def _listen(self) -> None:
        while True:
            hook = self._queue.get()
            if hook is _CLOSED:
                return
            handler = self._handlers.get(hook)
            if handler is None:
                continue
            try:
                handler(self._data)
            except Exception:
                traceback.print_exc()