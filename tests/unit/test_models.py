"""Tests for data models and configuration."""

import dataclasses
from pathlib import Path

import pytest

from ambitype.config import AmbitypeConfig, create_default_config
from ambitype.models import (
    CorpusIndexEntry,
    SessionStats,
    SessionSummary,
    TypingEvent,
    WpmDisplay,
    WpmDisplayState,
)


class TestCorpusIndexEntry:
    """Tests for CorpusIndexEntry."""

    def test_display_name_prefers_title(self):
        entry = CorpusIndexEntry(id="emma", path="/corpus/books/emma.txt", title="Emma")
        assert entry.display_name == "Emma"
        assert str(entry) == "Emma (/corpus/books/emma.txt)"

    def test_display_name_falls_back_to_id(self):
        entry = CorpusIndexEntry(id="emma", path="/corpus/books/emma.txt")
        assert entry.display_name == "emma"

    def test_is_immutable_and_hashable(self):
        entry = CorpusIndexEntry(id="emma", path="/corpus/books/emma.txt")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.path = "/corpus/books/other.txt"
        assert len({entry, CorpusIndexEntry(id="emma", path="/corpus/books/emma.txt")}) == 1


class TestTypingModels:
    """Tests for keystroke and statistics models."""

    def test_typing_event_defaults(self):
        event = TypingEvent(t=5)
        assert event.chars == 1
        assert event.correct_chars == 0

    def test_session_stats_has_typed(self):
        stats = SessionStats()
        assert stats.has_typed is False
        stats.total_typed_chars = 1
        stats.first_typed_at = 1000
        assert stats.has_typed is True

    def test_wpm_display_text(self):
        assert WpmDisplay(None, 0, WpmDisplayState.NO_DATA).text == "—"
        assert WpmDisplay(72, 80, WpmDisplayState.ACTIVE).text == "72"

    def test_session_summary_defaults(self):
        summary = SessionSummary()
        assert summary.accuracy == 100
        assert "accuracy=100%" in str(summary)


class TestConfig:
    """Tests for AmbitypeConfig."""

    def test_defaults(self):
        config = AmbitypeConfig()
        assert config.corpus_base_url == "http://127.0.0.1:5173"
        assert config.corpus_dir is None
        assert config.corpus_index_path == "/corpus/index.json"
        assert config.min_book_chars == 500
        assert config.tail_guard_chars == 12000
        assert config.initial_buffer_chars == 24000
        assert config.append_chunk_chars == 4000
        assert config.buffer_ahead_chars == 1700
        assert config.buffer_extension_step == 4000
        assert config.rolling_window_ms == 10000
        assert config.event_retention_ms == 30000
        assert config.short_session_skip_summary_seconds == 10

    def test_string_corpus_dir_becomes_path(self):
        config = create_default_config(corpus_dir="public")
        assert config.corpus_dir == Path("public")

    def test_empty_corpus_dir_means_http(self):
        assert create_default_config(corpus_dir="").corpus_dir is None

    def test_overrides(self):
        config = create_default_config(initial_buffer_chars=8000)
        assert config.initial_buffer_chars == 8000

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AmbitypeConfig().tail_guard_chars = 1
