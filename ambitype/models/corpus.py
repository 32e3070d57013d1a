"""Data models for the book corpus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ambitype.services.corpus_stream import CorpusSessionStream


@dataclass(frozen=True)
class CorpusIndexEntry:
    """One book listed in the corpus index.

    Entries are unique by ``path`` and never change once the index is loaded.
    """

    id: str  # Slug, e.g. "pride-and-prejudice"
    path: str  # Resource path, e.g. "/corpus/books/pride-and-prejudice.txt"
    title: str = ""
    bytes: int | None = None  # Size of the plaintext file, when the index records it

    @property
    def display_name(self) -> str:
        """Title when the index has one, otherwise the slug."""
        return self.title or self.id

    def __str__(self) -> str:
        return f"{self.display_name} ({self.path})"


@dataclass
class CorpusSession:
    """A freshly constructed practice session ready for typing."""

    entry: CorpusIndexEntry
    stream: CorpusSessionStream
    initial_text: str

    def __repr__(self) -> str:
        return (
            f"CorpusSession(entry='{self.entry.id}', "
            f"initial_chars={len(self.initial_text)}, cursor={self.stream.cursor})"
        )
