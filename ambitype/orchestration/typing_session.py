"""Orchestrator for a single typing practice session."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from ambitype.config import AmbitypeConfig
from ambitype.exceptions import AmbitypeException
from ambitype.interfaces import TextSource
from ambitype.models import (
    CorpusIndexEntry,
    SessionStats,
    SessionSummary,
    TypingEvent,
    WpmDisplay,
)
from ambitype.services import CorpusSessionService, FillerTextGenerator
from ambitype.services.typing_stats import (
    calculate_accuracy,
    calculate_session_average_wpm,
    get_session_wpm_display,
    is_word_boundary,
    trim_typing_events,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class TypingSession:
    """Drive one practice session: text buffer, keystrokes and live stats.

    The caller owns the event loop. It calls ``type_character`` for each
    key, ``tick`` on a fixed interval for the live WPM readout and
    ``finish`` when the user ends the session. Starting never fails: if
    the corpus cannot be loaded the session runs on filler text.
    """

    def __init__(
        self,
        config: AmbitypeConfig,
        session_service: CorpusSessionService | None,
        filler: FillerTextGenerator | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """Initialize the typing session.

        Args:
            config: Buffer and statistics settings
            session_service: Corpus session source (None runs on filler text only)
            filler: Placeholder text source used when the corpus fails
            clock: Millisecond clock, injectable for tests
        """
        self.config = config
        self._session_service = session_service
        self._filler = filler or FillerTextGenerator()
        self._clock = clock or _now_ms
        self._load_lock = threading.Lock()
        self._load_id = 0

        self.entry: CorpusIndexEntry | None = None
        self.source: TextSource = self._filler
        self.target_text = ""
        self.cursor = 0
        self.typed_results: list[bool | None] = []
        self.stats = SessionStats()
        self.events: list[TypingEvent] = []
        self.live_wpm: int | None = None
        self.started_at = 0
        self.last_tick_at = 0
        self._word_has_chars = False

    @property
    def is_fallback(self) -> bool:
        """Check if the session is running on filler text."""
        return self.entry is None

    def _next_load_id(self) -> int:
        with self._load_lock:
            self._load_id += 1
            return self._load_id

    def _is_current(self, load_id: int) -> bool:
        with self._load_lock:
            return self._load_id == load_id

    def preload(self) -> None:
        """Warm up the next corpus session in the background (never raises)."""
        if self._session_service is None:
            return
        try:
            self._session_service.preload_corpus_session(self.config.initial_buffer_chars)
        except Exception:
            logger.debug("Could not start corpus preload", exc_info=True)

    def start(self) -> bool:
        """Prepare a fresh session, falling back to filler text on corpus errors.

        Returns:
            True if this call's result was applied, False if a newer start
            superseded it while the corpus was loading
        """
        load_id = self._next_load_id()
        initial_chars = self.config.initial_buffer_chars

        entry = None
        source: TextSource = self._filler
        initial_text = ""

        if self._session_service is not None:
            try:
                corpus_session = self._session_service.consume_preloaded_corpus_session(
                    initial_chars
                )
                entry = corpus_session.entry
                source = corpus_session.stream
                initial_text = corpus_session.initial_text
            except AmbitypeException:
                logger.exception("Failed to load corpus text, using filler text")

        if not self._is_current(load_id):
            logger.debug(f"Discarding stale session start #{load_id}")
            return False

        if not initial_text:
            entry = None
            source = self._filler
            initial_text = self._filler.create_initial_buffer(initial_chars)

        self.entry = entry
        self.source = source
        self._reset(initial_text)
        return True

    def _reset(self, initial_text: str) -> None:
        self.target_text = initial_text
        self.cursor = 0
        self.typed_results = []
        self.stats = SessionStats()
        self.events = []
        self.live_wpm = None
        self.started_at = self._clock()
        self.last_tick_at = 0
        self._word_has_chars = False

    def _extend_buffer(self) -> None:
        if len(self.target_text) > self.cursor + self.config.buffer_ahead_chars:
            return
        minimum_length = (
            self.cursor + self.config.buffer_ahead_chars + self.config.buffer_extension_step
        )
        self.target_text = self.source.ensure_length(self.target_text, minimum_length)

    def type_character(self, character: str, now: int | None = None) -> bool:
        """Record one typed character against the target text.

        Args:
            character: The typed character
            now: Keystroke time in milliseconds (clock time by default)

        Returns:
            True if the character matched the target
        """
        now = self._clock() if now is None else now
        self._extend_buffer()

        position = self.cursor
        expected = self.target_text[position] if position < len(self.target_text) else " "
        is_correct = character == expected

        if position < len(self.typed_results):
            self.typed_results[position] = is_correct
        else:
            self.typed_results.append(is_correct)
        self.cursor = position + 1

        stats = self.stats
        stats.total_typed_chars += 1
        if is_correct:
            stats.correct_typed_chars += 1
        if not stats.first_typed_at:
            stats.first_typed_at = now
        stats.last_typed_at = now

        self.events.append(TypingEvent(t=now, chars=1, correct_chars=1 if is_correct else 0))
        trim_typing_events(self.events, now, self.config.event_retention_ms)

        if is_word_boundary(character):
            if self._word_has_chars:
                stats.total_words_typed += 1
            self._word_has_chars = False
        else:
            self._word_has_chars = True

        return is_correct

    def step_back(self) -> None:
        """Move the cursor back one character and forget its result."""
        if self.cursor <= 0:
            return
        self.cursor -= 1
        if self.cursor < len(self.typed_results):
            self.typed_results[self.cursor] = None

    def tick(self, now: int | None = None) -> WpmDisplay:
        """Refresh the live WPM readout; call whenever ``tick_due`` is True."""
        now = self._clock() if now is None else now
        self.last_tick_at = now
        trim_typing_events(self.events, now, self.config.event_retention_ms)

        display = get_session_wpm_display(
            self.events,
            self.stats,
            now,
            self.live_wpm,
            window_ms=self.config.rolling_window_ms,
            warmup_ms=self.config.wpm_warmup_ms,
            warmup_min_chars=self.config.wpm_warmup_min_chars,
            idle_reset_ms=self.config.wpm_idle_reset_ms,
        )
        self.live_wpm = display.display_wpm
        return display

    def tick_due(self, now: int | None = None) -> bool:
        """Check if ``wpm_ui_update_ms`` has passed since the last tick."""
        if not self.last_tick_at:
            return True
        now = self._clock() if now is None else now
        return now - self.last_tick_at >= self.config.wpm_ui_update_ms

    def is_idle(self, now: int | None = None) -> bool:
        """Check if no key has been pressed for ``idle_threshold_ms``."""
        if not self.stats.last_typed_at:
            return True
        now = self._clock() if now is None else now
        return now - self.stats.last_typed_at >= self.config.idle_threshold_ms

    def elapsed_seconds(self, now: int | None = None) -> int:
        """Whole seconds since the session started."""
        if not self.started_at:
            return 0
        now = self._clock() if now is None else now
        return max(0, (now - self.started_at) // 1000)

    def finish(self, now: int | None = None) -> SessionSummary | None:
        """End the session and compute its summary.

        Returns:
            SessionSummary, or None when the session was too short to summarize
        """
        session_seconds = self.elapsed_seconds(now)
        if session_seconds < self.config.short_session_skip_summary_seconds:
            logger.debug(f"Session too short for a summary ({session_seconds}s)")
            return None

        carried_words = 1 if self._word_has_chars else 0
        summary = SessionSummary(
            average_pace=calculate_session_average_wpm(
                self.stats.correct_typed_chars, session_seconds * 1000
            ),
            words_typed=self.stats.total_words_typed + carried_words,
            accuracy=calculate_accuracy(
                self.stats.correct_typed_chars, self.stats.total_typed_chars
            ),
            time_typed=session_seconds,
        )
        logger.info(f"Finished session: {summary}")
        return summary
