"""Keyframe timelines played back at millisecond resolution."""

import threading
import time
from datetime import timedelta
from typing import Callable, Dict, List, Optional

TICK = timedelta(milliseconds=1)


class Layer:
    """A named set of actions keyed by their offset from the start."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.keys: Dict[timedelta, Callable[[], None]] = {}

    def add_keyframe(self, timestamp: timedelta, action: Callable[[], None]) -> None:
        """Run ``action`` at ``timestamp``; an existing keyframe there is kept."""
        self.keys.setdefault(timestamp, action)

    def clear_keyframe(self, timestamp: timedelta) -> None:
        """Remove the keyframe at ``timestamp`` if there is one."""
        self.keys.pop(timestamp, None)


class Timeline:
    """Plays its layers once from zero to ``duration``, one millisecond per tick."""

    def __init__(self, duration: timedelta) -> None:
        self.duration = duration
        self._layers: List[Layer] = []
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def add_layer(self, layer: Layer) -> Layer:
        """Append ``layer`` and return it."""
        with self._lock:
            self._layers.append(layer)
        return layer

    def play(self) -> None:
        """Start playback on a background thread."""
        with self._lock:
            if not self._layers:
                raise ValueError("no keyframes found")
            if self._thread is not None:
                raise RuntimeError("timeline already playing")
            self._thread = threading.Thread(target=self._run, name="timeline", daemon=True)
            self._thread.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until playback ends; return False if ``timeout`` seconds pass first."""
        return self._finished.wait(timeout)

    def clear_layer(self, index: int) -> None:
        """Remove the layer at ``index``."""
        with self._lock:
            if not 0 <= index < len(self._layers):
                raise IndexError("layer idx does not exist")
            del self._layers[index]

    def _run(self) -> None:
        start = time.monotonic()
        elapsed = timedelta(0)
        try:
            while True:
                with self._lock:
                    layers = list(self._layers)
                for layer in layers:
                    action = layer.keys.get(elapsed)
                    if action is not None:
                        action()
                if elapsed >= self.duration:
                    break
                elapsed += TICK
                delay = start + elapsed.total_seconds() - time.monotonic()
                if delay > 0:
                    time.sleep(delay)
        finally:
            self._finished.set()