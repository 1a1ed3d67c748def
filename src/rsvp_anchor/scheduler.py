from __future__ import annotations

import logging
import math
import time
from dataclasses import replace
from typing import Callable, List, Sequence

from .analytics import compute_analytics, round_half_up
from .config import InvalidConfigurationError, RsvpConfig, validate_config
from .models import (
    PlaybackState,
    SessionAnalytics,
    SessionComplete,
    SessionSample,
    Tick,
)
from .pivot import PivotEngine
from .timing import clamp_rate, compute_delay
from .tokenization import join_chunk, split_words

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_millis() -> float:
    return time.monotonic() * 1000.0


class PlaybackScheduler:
    """
    Pull-based playback state machine over a fixed word sequence.

    The host calls :meth:`tick` whenever the previously returned delay has
    elapsed. Each tick advances by one chunk, accelerates the rate and records
    a :class:`SessionSample`; once the sequence is exhausted the next tick
    returns :class:`SessionComplete`. Timer ownership stays with the host.
    """

    def __init__(
        self,
        config: RsvpConfig | None = None,
        engine: PivotEngine | None = None,
        clock: Clock = monotonic_millis,
    ) -> None:
        self._config = validate_config(config or RsvpConfig())
        self._engine = engine if engine is not None else PivotEngine()
        self._clock = clock
        self._sequence: List[str] = []
        self._current_index = 0
        self._base_rate = self._config.initial_rate
        self._rate = self._base_rate
        self._state = PlaybackState.IDLE
        self._samples: List[SessionSample] = []
        self._session_start: float | None = None
        self._paused_at: float | None = None

    @property
    def config(self) -> RsvpConfig:
        return replace(self._config)

    @property
    def engine(self) -> PivotEngine:
        return self._engine

    @property
    def sequence(self) -> List[str]:
        return list(self._sequence)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def chunk_size(self) -> int:
        return self._config.chunk_size

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is PlaybackState.RUNNING

    @property
    def samples(self) -> List[SessionSample]:
        return list(self._samples)

    @property
    def progress(self) -> float:
        """Fraction of the sequence already displayed."""
        if not self._sequence:
            return 0.0
        return min(1.0, self._current_index / len(self._sequence))

    def configure(self, config: RsvpConfig) -> None:
        """
        Apply a new configuration.

        Raises InvalidConfigurationError without touching any state when the
        configuration is rejected. The new chunk size applies from the next
        tick; the initial rate becomes the current rate.
        """
        validated = validate_config(config)
        self._config = validated
        self._base_rate = validated.initial_rate
        self._rate = validated.initial_rate
        logger.debug("Configured scheduler: %s", validated)

    def set_chunk_size(self, chunk_size: int) -> None:
        """Change the chunk size from the next tick on, keeping the current rate."""
        self._config = validate_config(
            replace(self._config, chunk_size=chunk_size, initial_rate=self._base_rate)
        )

    def set_rate(self, new_rate: float) -> None:
        """
        Change the current rate, clamped to the configured range.

        Progress, session start and recorded samples are untouched; the next
        delay is computed at the new rate.
        """
        try:
            requested = float(new_rate)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(f"rate must be numeric, got {new_rate!r}") from exc
        if not math.isfinite(requested) or requested <= 0:
            raise InvalidConfigurationError(f"rate must be positive, got {new_rate!r}")
        self._rate = clamp_rate(requested, self._config.min_rate, self._config.max_rate)
        self._base_rate = self._rate
        if self._rate != requested:
            logger.warning("Rate %.1f clamped to %.1f", requested, self._rate)

    def set_sequence(self, words: Sequence[str]) -> None:
        """Replace the word sequence and start over from a clean session."""
        if self.is_running:
            logger.info("Sequence replaced while running; stopping playback.")
            self.stop()
        self._sequence = [word for word in words if word]
        self._clear_session()
        self._state = PlaybackState.IDLE
        logger.info("Loaded %d words", len(self._sequence))

    def load_text(self, text: str) -> None:
        self.set_sequence(split_words(text))

    def start(self) -> None:
        """Begin or resume playback. No-op for an empty sequence."""
        if self.is_running:
            return
        if not self._sequence:
            logger.debug("start() ignored: no words loaded")
            return
        if self._current_index >= len(self._sequence):
            self._clear_session()

        now = self._clock()
        if self._session_start is None:
            self._session_start = now
        elif self._paused_at is not None:
            # Exclude paused time so elapsed values keep growing with reading time only.
            self._session_start += now - self._paused_at
        self._paused_at = None
        self._state = PlaybackState.RUNNING
        logger.info(
            "Playback started at word %d/%d (%.0f WPM)",
            self._current_index,
            len(self._sequence),
            self._rate,
        )

    def stop(self) -> None:
        """Pause playback. Idempotent."""
        if not self.is_running:
            return
        self._state = PlaybackState.IDLE
        self._paused_at = self._clock()
        logger.info("Playback stopped at word %d", self._current_index)

    def restart(self) -> None:
        """Rewind to the first word, clearing samples and the pivot anchor."""
        was_running = self.is_running
        self.stop()
        self._clear_session()
        self._state = PlaybackState.IDLE
        if was_running:
            self.start()

    def tick(self) -> Tick | SessionComplete | None:
        """Advance one chunk; ``None`` when not running."""
        if not self.is_running:
            return None
        if self._current_index >= len(self._sequence):
            self._state = PlaybackState.FINISHED
            self._paused_at = None
            logger.info(
                "Session complete: %d words, %d chunks",
                len(self._sequence),
                len(self._samples),
            )
            return SessionComplete(
                total_words=len(self._sequence), samples=len(self._samples)
            )

        start_idx = self._current_index
        chunk = self._sequence[start_idx : start_idx + self._config.chunk_size]
        self._current_index += self._config.chunk_size
        self._rate = clamp_rate(
            self._rate + self._config.acceleration_per_word * len(chunk),
            self._config.min_rate,
            self._config.max_rate,
        )
        text = join_chunk(chunk)
        self._samples.append(
            SessionSample(
                chunk_text=text,
                rate=round_half_up(self._rate),
                elapsed_millis=self._elapsed_millis(),
            )
        )
        delay = compute_delay(chunk, self._rate)
        logger.debug(
            "tick index=%d chunk=%r rate=%.1f delay=%.1fms",
            start_idx,
            text,
            self._rate,
            delay,
        )
        return Tick(chunk=chunk, delay_ms=delay, index=start_idx, rate=self._rate)

    def get_analytics(self) -> SessionAnalytics | None:
        """Summaries of the recorded time series; ``None`` before any tick."""
        return compute_analytics(self._samples)

    def _elapsed_millis(self) -> int:
        if self._session_start is None:
            return 0
        elapsed = int(self._clock() - self._session_start)
        if self._samples:
            elapsed = max(elapsed, self._samples[-1].elapsed_millis)
        return max(0, elapsed)

    def _clear_session(self) -> None:
        self._current_index = 0
        self._samples = []
        self._session_start = None
        self._paused_at = None
        self._rate = self._base_rate
        self._engine.reset()
