"""Rolling and session typing statistics.

Words per minute use the standard five-characters-per-word convention.
Timestamps and durations are in milliseconds.
"""

import math
import re
from collections.abc import Sequence

from ambitype.models import RollingWpm, SessionStats, TypingEvent, WpmDisplay, WpmDisplayState

CHARS_PER_WORD = 5
MS_PER_MINUTE = 60000

IDLE_THRESHOLD_MS = 5000
ROLLING_WINDOW_MS = 10000
WPM_UI_UPDATE_MS = 1000
WPM_WARMUP_MS = 3000
WPM_WARMUP_MIN_CHARS = 10
WPM_IDLE_RESET_MS = 15000
MIN_SESSION_MS = 1000

WORD_BOUNDARY_PATTERN = re.compile(r"[\s.,!?;:]")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def chars_to_wpm(chars: int, duration_ms: float) -> int:
    """Convert a character count over a duration into words per minute."""
    return round_half_up(chars / CHARS_PER_WORD / (duration_ms / MS_PER_MINUTE))


def is_word_boundary(character: str) -> bool:
    """Check if a typed character ends a word (whitespace or . , ! ? ; :)."""
    if not character:
        return False
    return WORD_BOUNDARY_PATTERN.fullmatch(character) is not None


def calculate_accuracy(correct_characters: int, total_characters: int) -> int:
    """Percentage of correct characters; 100 when nothing has been typed."""
    if not total_characters:
        return 100
    return round_half_up(correct_characters / total_characters * 100)


def trim_typing_events(
    events: list[TypingEvent], now: int, retention_ms: int = ROLLING_WINDOW_MS * 3
) -> int:
    """Drop events older than ``now - retention_ms`` from the front of the log.

    Events are time-ascending, so this removes a prefix in place.

    Returns:
        Number of events removed
    """
    if not events:
        return 0

    min_time = now - retention_ms
    trim_count = 0
    while trim_count < len(events) and events[trim_count].t < min_time:
        trim_count += 1

    if trim_count:
        del events[:trim_count]
    return trim_count


def calculate_rolling_wpm_from_events(
    events: Sequence[TypingEvent], now: int, window_ms: int = ROLLING_WINDOW_MS
) -> RollingWpm:
    """Compute WPM from the events inside ``[now - window_ms, now]``.

    Scans backwards from the newest event and stops at the first one older
    than the window. The divisor is always the full window length.
    """
    window_start = now - window_ms
    sum_chars = 0
    sum_correct_chars = 0
    has_events_in_window = False

    for event in reversed(events):
        if event.t < window_start:
            break
        has_events_in_window = True
        sum_chars += event.chars
        sum_correct_chars += event.correct_chars

    if not has_events_in_window:
        return RollingWpm()

    return RollingWpm(
        rolling_wpm=chars_to_wpm(sum_correct_chars, window_ms),
        raw_wpm=chars_to_wpm(sum_chars, window_ms),
        has_events_in_window=True,
    )


def get_rolling_wpm_display(
    events: Sequence[TypingEvent],
    now: int,
    first_typed_at: int,
    total_typed_chars: int,
    last_typed_at: int,
    previous_display: int | None,
    window_ms: int = ROLLING_WINDOW_MS,
    warmup_ms: int = WPM_WARMUP_MS,
    warmup_min_chars: int = WPM_WARMUP_MIN_CHARS,
    idle_reset_ms: int = WPM_IDLE_RESET_MS,
) -> WpmDisplay:
    """Decide what the live WPM readout shows on this tick.

    - Nothing typed yet: dash.
    - Warm-up (too little time and too few characters): dash.
    - Events in the window: the rolling corrected WPM.
    - No recent events but a keystroke within ``idle_reset_ms``: keep the
      previous value so short pauses don't flicker.
    - Idle for longer: dash again.
    """
    if not first_typed_at or not total_typed_chars:
        return WpmDisplay(None, 0, WpmDisplayState.NO_DATA)

    warmup_reached = now - first_typed_at >= warmup_ms or total_typed_chars >= warmup_min_chars
    if not warmup_reached:
        return WpmDisplay(None, 0, WpmDisplayState.WARMUP)

    rolling = calculate_rolling_wpm_from_events(events, now, window_ms)
    if rolling.has_events_in_window:
        return WpmDisplay(rolling.rolling_wpm, rolling.raw_wpm, WpmDisplayState.ACTIVE)

    if last_typed_at and now - last_typed_at < idle_reset_ms:
        return WpmDisplay(previous_display, 0, WpmDisplayState.HELD)

    return WpmDisplay(None, 0, WpmDisplayState.RESET)


def get_session_wpm_display(
    events: Sequence[TypingEvent],
    stats: SessionStats,
    now: int,
    previous_display: int | None,
    **windows,
) -> WpmDisplay:
    """Run the display policy against a session's running totals."""
    return get_rolling_wpm_display(
        events,
        now,
        first_typed_at=stats.first_typed_at,
        total_typed_chars=stats.total_typed_chars,
        last_typed_at=stats.last_typed_at,
        previous_display=previous_display,
        **windows,
    )


def calculate_session_average_wpm(correct_chars: int, session_ms: float) -> int:
    """Average pace over a whole session; 0 for sessions under a second."""
    if session_ms < MIN_SESSION_MS or not correct_chars:
        return 0
    return chars_to_wpm(correct_chars, session_ms)
