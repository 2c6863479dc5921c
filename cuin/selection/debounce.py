"""Trailing-edge debouncing for free-text filter inputs."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Protocol, Sequence

DEFAULT_DELAY_MS = 300


class _Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[..., None], Sequence[Any]], _Timer]


def _thread_timer(interval: float, function: Callable[..., None], args: Sequence[Any]) -> _Timer:
    timer = threading.Timer(interval, function, args=list(args))
    timer.daemon = True
    return timer


class Debouncer:
    """Runs ``callback`` with the last arguments once calls stop for ``delay_ms``.

    Superseded calls are dropped before they run; nothing partial is applied.
    """

    def __init__(
        self,
        callback: Callable[..., None],
        delay_ms: int = DEFAULT_DELAY_MS,
        timer_factory: TimerFactory = _thread_timer,
    ) -> None:
        self._callback = callback
        self._delay_ms = delay_ms
        self._delay = delay_ms / 1000.0
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[_Timer] = None
        self._pending: Optional[tuple[Any, ...]] = None
        self._generation = 0

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = args
            self._generation += 1
            self._timer = self._timer_factory(
                self._delay, self._fire, (self._generation, args)
            )
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the quiet window."""
        with self._lock:
            args = self._pending
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
        if args is not None:
            self._callback(*args)

    def _fire(self, generation: int, args: tuple[Any, ...]) -> None:
        with self._lock:
            # A newer call replaced this one after the timer had already expired.
            if generation != self._generation or self._pending is None:
                return
            self._timer = None
            self._pending = None
        self._callback(*args)
