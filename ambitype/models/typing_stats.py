"""Data models for keystroke events and typing statistics."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TypingEvent:
    """A single keystroke (or batch of keystrokes) at a point in time."""

    t: int  # Timestamp in milliseconds
    chars: int = 1
    correct_chars: int = 0


@dataclass
class SessionStats:
    """Running totals for the active session.

    Timestamps are epoch milliseconds; 0 means no keystroke yet.
    """

    total_typed_chars: int = 0
    correct_typed_chars: int = 0
    total_words_typed: int = 0
    first_typed_at: int = 0
    last_typed_at: int = 0

    @property
    def has_typed(self) -> bool:
        """Check if any keystroke has been recorded."""
        return self.first_typed_at > 0 and self.total_typed_chars > 0


@dataclass(frozen=True)
class RollingWpm:
    """Words per minute computed over a trailing time window."""

    rolling_wpm: int = 0  # From correct characters only
    raw_wpm: int = 0  # From every typed character
    has_events_in_window: bool = False


class WpmDisplayState(Enum):
    """Which rule of the live WPM display policy produced a value."""

    NO_DATA = "no_data"
    WARMUP = "warmup"
    ACTIVE = "active"
    HELD = "held"
    RESET = "reset"


@dataclass(frozen=True)
class WpmDisplay:
    """Value to show in the live WPM readout (None renders as a dash)."""

    display_wpm: int | None
    raw_wpm: int
    state: WpmDisplayState

    @property
    def text(self) -> str:
        """Readout text for the live WPM display."""
        return "—" if self.display_wpm is None else str(self.display_wpm)


@dataclass(frozen=True)
class SessionSummary:
    """Final figures shown when a session ends."""

    average_pace: int = 0
    words_typed: int = 0
    accuracy: int = 100
    time_typed: int = 0  # Seconds

    def __str__(self) -> str:
        return (
            f"SessionSummary(pace={self.average_pace} wpm, words={self.words_typed}, "
            f"accuracy={self.accuracy}%, time={self.time_typed}s)"
        )
