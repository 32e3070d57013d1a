"""Data models for Ambitype."""

from .corpus import CorpusIndexEntry, CorpusSession
from .typing_stats import (
    RollingWpm,
    SessionStats,
    SessionSummary,
    TypingEvent,
    WpmDisplay,
    WpmDisplayState,
)

__all__ = [
    "CorpusIndexEntry",
    "CorpusSession",
    "TypingEvent",
    "SessionStats",
    "RollingWpm",
    "WpmDisplay",
    "WpmDisplayState",
    "SessionSummary",
]
