"""Configuration classes for Ambitype."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AmbitypeConfig:
    """Immutable configuration for corpus streaming and typing statistics.

    All configuration is frozen (immutable) so that a preload running in a
    background thread and the active session always see the same values.
    """

    # Corpus source settings
    corpus_base_url: str = "http://127.0.0.1:5173"
    corpus_dir: Path | None = None  # Read corpus from disk instead of HTTP
    corpus_index_path: str = "/corpus/index.json"
    request_timeout: float = 10.0  # Seconds per HTTP request

    # Corpus stream settings
    min_book_chars: int = 500  # Normalized books shorter than this are rejected
    tail_guard_chars: int = 12000  # Characters kept reachable after a random start
    initial_buffer_chars: int = 24000
    append_chunk_chars: int = 4000

    # Typing buffer settings
    buffer_ahead_chars: int = 1700  # Extend when fewer chars remain ahead of the cursor
    buffer_extension_step: int = 4000

    # Live statistics settings (milliseconds)
    rolling_window_ms: int = 10000
    event_retention_ms: int = 30000  # 3x the rolling window
    wpm_ui_update_ms: int = 1000
    wpm_warmup_ms: int = 3000
    wpm_warmup_min_chars: int = 10
    wpm_idle_reset_ms: int = 15000
    idle_threshold_ms: int = 5000

    # Summary settings
    short_session_skip_summary_seconds: int = 10

    def __post_init__(self):
        """Convert string paths to Path objects if needed."""
        if isinstance(self.corpus_dir, str):
            object.__setattr__(self, "corpus_dir", Path(self.corpus_dir) if self.corpus_dir else None)
