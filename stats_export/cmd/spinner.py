from __future__ import annotations
import itertools
import sys
import threading
from typing import Optional, TextIO


# spinner shown while a blocking call runs; silent when the stream is not a terminal
class Spinner:
    def __init__(self, message: str = "Processando", stream: TextIO | None = None, interval: float = 0.1) -> None:
        self._message = message
        self._stream = stream or sys.stdout
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def _spin(self) -> None:
        for char in itertools.cycle("|/-\\"):
            if self._stop_event.wait(self._interval):
                break
            self._stream.write(f"\r{self._message}... {char}")
            self._stream.flush()
        # clear the line when done
        self._stream.write("\r" + " " * (len(self._message) + 10) + "\r")
        self._stream.flush()

    def start(self) -> None:
        if not self.enabled:
            return
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
