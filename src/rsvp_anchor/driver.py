from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol

from .models import PivotResult, SessionAnalytics, SessionComplete, Tick
from .pivot import PivotEngine
from .scheduler import PlaybackScheduler

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[Tick, PivotResult], None]
CompleteCallback = Callable[[SessionAnalytics | None], None]


class CancelableTimer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], CancelableTimer]


def threading_timer(delay_seconds: float, callback: Callable[[], None]) -> CancelableTimer:
    """Fire-once daemon timer backed by :class:`threading.Timer`."""
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    return timer


class PlaybackDriver:
    """
    Host-side loop that owns timing for a :class:`PlaybackScheduler`.

    Every tick is delivered under a single lock, and at most one timer is
    pending at a time. Timers carry the generation they were scheduled in so a
    callback that races with ``pause`` or a rate change is dropped.
    """

    def __init__(
        self,
        scheduler: PlaybackScheduler,
        on_chunk: ChunkCallback,
        on_complete: CompleteCallback | None = None,
        timer_factory: TimerFactory = threading_timer,
    ) -> None:
        self._scheduler = scheduler
        self._on_chunk = on_chunk
        self._on_complete = on_complete
        self._timer_factory = timer_factory
        self._lock = threading.RLock()
        self._timer: CancelableTimer | None = None
        self._generation = 0
        self._finished = threading.Event()

    @property
    def scheduler(self) -> PlaybackScheduler:
        return self._scheduler

    @property
    def engine(self) -> PivotEngine:
        return self._scheduler.engine

    @property
    def is_playing(self) -> bool:
        return self._scheduler.is_running

    def load_text(self, text: str) -> bool:
        """Replace the words to read; ignored while playing. Returns True when applied."""
        with self._locked():
            if self._scheduler.is_running:
                logger.debug("Text change ignored while playing")
                return False
            self._cancel_pending()
            self._scheduler.load_text(text)
            return True

    def play(self) -> None:
        with self._locked():
            if self._scheduler.is_running:
                return
            self._finished.clear()
            self._scheduler.start()
            if self._scheduler.is_running:
                self._run_tick()

    def pause(self) -> None:
        with self._locked():
            self._cancel_pending()
            self._scheduler.stop()

    def toggle(self) -> None:
        with self._locked():
            if self._scheduler.is_running:
                self.pause()
            else:
                self.play()

    def set_rate(self, rate: float) -> None:
        """Apply a new rate; while playing, the next chunk is shown immediately at it."""
        with self._locked():
            self._scheduler.set_rate(rate)
            if self._scheduler.is_running:
                self._cancel_pending()
                self._run_tick()

    def set_chunk_size(self, chunk_size: int) -> None:
        with self._locked():
            self._scheduler.set_chunk_size(chunk_size)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the session completes; returns False on timeout."""
        return self._finished.wait(timeout)

    def _run_tick(self) -> None:
        result = self._scheduler.tick()
        if result is None:
            return
        if isinstance(result, SessionComplete):
            self._timer = None
            self._finished.set()
            if self._on_complete is not None:
                self._on_complete(self._scheduler.get_analytics())
            return

        pivot = self.engine.process(result.text)
        self._on_chunk(result, pivot)
        self._schedule(result.delay_ms)

    def _schedule(self, delay_ms: float) -> None:
        self._cancel_pending()
        generation = self._generation

        def fire() -> None:
            with self._locked():
                if generation != self._generation:
                    return
                self._timer = None
                self._run_tick()

        self._timer = self._timer_factory(delay_ms / 1000.0, fire)
        self._timer.start()

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @contextmanager
    def _locked(self) -> Iterator[None]:
        self._lock.acquire()
        try:
            yield
        finally:
            self._lock.release()
