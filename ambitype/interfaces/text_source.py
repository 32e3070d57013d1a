"""Protocol for typing text sources."""

from typing import Protocol


class TextSource(Protocol):
    """A source that can keep a typing buffer topped up.

    Implemented by the corpus session stream and by the filler text
    generator used when the corpus is unavailable.
    """

    def ensure_length(self, current_text: str, min_length: int) -> str:
        """Return ``current_text`` extended to at least ``min_length`` characters."""
        ...

    def create_initial_buffer(self, min_length: int) -> str:
        """Build the first buffer for a fresh session."""
        ...
