from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional, Tuple


class Debouncer:
    """Runs ``fn`` once after calls stop arriving for ``delay`` seconds.

    Each owner keeps its own instance (and therefore its own timer); call
    ``cancel`` on teardown so a pending call never fires late.
    """

    def __init__(self, fn: Callable[..., Any], delay: float):
        self._fn = fn
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def call(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._pending = (args, kwargs)
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self) -> None:
        with self._lock:
            pending, self._pending = self._pending, None
            self._timer = None
        if pending is not None:
            args, kwargs = pending
            self._fn(*args, **kwargs)

    def flush(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        self._fire()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None


class Throttle:
    """Leading-edge rate limit: run now if ``interval`` has passed, else keep the
    latest call and run it when the interval expires."""

    def __init__(self, fn: Callable[..., Any], interval: float):
        self._fn = fn
        self._interval = interval
        self._last_ts = 0.0
        self._lock = threading.Lock()
        self._trailing = Debouncer(self._run_trailing, interval)

    def _run_trailing(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._last_ts = time.monotonic()
        self._fn(*args, **kwargs)

    def call(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            now = time.monotonic()
            since_last = now - self._last_ts
            run_now = since_last >= self._interval
            if run_now:
                self._last_ts = now
        if run_now:
            self._trailing.cancel()
            self._fn(*args, **kwargs)
        else:
            self._trailing.call(*args, **kwargs)

    def flush(self) -> None:
        self._trailing.flush()

    def cancel(self) -> None:
        self._trailing.cancel()
