"""Terminal progress line for the fetch pipeline."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class ProgressLine:
    """Redraws one stderr line with the current pipeline step and elapsed time.

    Used as a context manager; the instance itself is the ``on_progress``
    callback. On a non-TTY stream, or when disabled, every call is a no-op.
    """

    interval = 0.08

    def __init__(self, enabled: bool = True, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stderr
        self.active = enabled and self.stream.isatty()
        self._message = ""
        self._started = 0.0
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    def __call__(self, message: str) -> None:
        with self._lock:
            self._message = message

    def __enter__(self) -> ProgressLine:
        if self.active:
            self._started = time.monotonic()
            self._thread = threading.Thread(target=self._draw, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc_info) -> None:
        if self._thread is None:
            return
        self._done.set()
        self._thread.join()
        self._thread = None

    def _draw(self) -> None:
        tick = 0
        while not self._done.is_set():
            with self._lock:
                text = self._message
            if text:
                elapsed = time.monotonic() - self._started
                frame = FRAMES[tick % len(FRAMES)]
                self.stream.write(f"\r{frame} {text} ({elapsed:.0f}s)\033[K")
                self.stream.flush()
                tick += 1
            self._done.wait(self.interval)
        self.stream.write("\r\033[K")
        self.stream.flush()
