"""Endless, wrap-around text stream over a single corpus book."""

import logging
import random
import threading

from ambitype.models import CorpusIndexEntry
from ambitype.utils import ends_with_whitespace

logger = logging.getLogger(__name__)

DEFAULT_TAIL_GUARD_CHARS = 12000
DEFAULT_APPEND_CHUNK_CHARS = 4000
DEFAULT_INITIAL_BUFFER_CHARS = 24000
WRAP_SEPARATOR = " "


def find_safe_boundary(text: str, start_offset: int) -> int:
    """Snap an offset forward to the first character of the next word.

    Skips the rest of the word containing ``start_offset`` and the
    whitespace after it.

    Args:
        text: Text to scan
        start_offset: Rough offset (clamped into the text)

    Returns:
        Offset of a word start preceded by whitespace, or 0 if the scan
        runs off the end of the text
    """
    if not text:
        return 0

    length = len(text)
    offset = max(0, min(start_offset, length - 1))

    while offset < length and not text[offset].isspace():
        offset += 1

    while offset < length and text[offset].isspace():
        offset += 1

    return offset if offset < length else 0


def pick_random_start_offset(
    text: str,
    tail_guard: int = DEFAULT_TAIL_GUARD_CHARS,
    rng: random.Random | None = None,
) -> int:
    """Pick a random word-aligned offset that leaves ``tail_guard`` chars ahead.

    Books shorter than the tail guard always start from the first word boundary.
    """
    if not text:
        return 0

    rng = rng or random
    max_offset = max(0, len(text) - tail_guard)
    rough_offset = rng.randint(0, max_offset)
    return find_safe_boundary(text, rough_offset)


class CorpusSessionStream:
    """Cursor over one book that never runs out of text.

    Reading starts at a random word boundary. When the cursor reaches the
    end of the book it jumps to a fresh random word boundary, and a single
    space is inserted so the two segments never fuse into one word.

    Thread Safety:
        The stream owns its cursor. Calls on one instance are serialized
        by an internal lock; separate streams share only the immutable
        book text.
    """

    def __init__(
        self,
        book_entry: CorpusIndexEntry,
        book_text: str,
        rng: random.Random | None = None,
        tail_guard: int = DEFAULT_TAIL_GUARD_CHARS,
        chunk_chars: int = DEFAULT_APPEND_CHUNK_CHARS,
    ):
        """Initialize the stream at a random start offset.

        Args:
            book_entry: Index entry the text belongs to
            book_text: Normalized text of the book
            rng: Random source for start and wrap offsets
            tail_guard: Characters kept reachable after a random start
            chunk_chars: Minimum chunk size appended by ``ensure_length``
        """
        self.book_entry = book_entry
        self.book_text = book_text
        self._rng = rng or random.Random()
        self._tail_guard = tail_guard
        self._chunk_chars = chunk_chars
        self._lock = threading.RLock()
        self.wrap_count = 0
        self._last_emitted = ""
        self.cursor = pick_random_start_offset(book_text, tail_guard, self._rng)

    @property
    def max_start_offset(self) -> int:
        """Upper bound of the rough random offset before snapping."""
        return max(0, len(self.book_text) - self._tail_guard)

    def next_chunk(self, target_chars: int = DEFAULT_APPEND_CHUNK_CHARS) -> str:
        """Read at least ``target_chars`` characters, wrapping as needed.

        The chunk may end mid-word; wrap seams never split a word.

        Args:
            target_chars: Desired chunk length

        Returns:
            Chunk text (empty only for an empty book)
        """
        with self._lock:
            text = self.book_text
            length = len(text)
            parts: list[str] = []
            size = 0

            while size < target_chars:
                if self.cursor >= length:
                    self.cursor = pick_random_start_offset(text, self._tail_guard, self._rng)
                    self.wrap_count += 1
                    logger.debug(
                        f"Wrapped {self.book_entry.id} to offset {self.cursor} "
                        f"(wrap #{self.wrap_count})"
                    )

                    previous = parts[-1] if parts else self._last_emitted
                    if previous and not ends_with_whitespace(previous):
                        parts.append(WRAP_SEPARATOR)
                        size += len(WRAP_SEPARATOR)

                remaining = length - self.cursor
                if remaining <= 0:
                    break

                take = min(target_chars - size, remaining)
                if take <= 0:
                    break

                parts.append(text[self.cursor : self.cursor + take])
                self.cursor += take
                size += take

            chunk = "".join(parts)
            if chunk:
                self._last_emitted = chunk[-1]
            return chunk

    def ensure_length(self, current_text: str, min_length: int) -> str:
        """Append chunks until the text is at least ``min_length`` long.

        Every call advances the cursor, so callers must keep the returned
        text and pass it back next time.

        Args:
            current_text: Buffer previously returned by this stream
            min_length: Required length

        Returns:
            ``current_text`` extended with fresh chunks
        """
        with self._lock:
            parts = [current_text]
            size = len(current_text)

            while size < min_length:
                chunk = self.next_chunk(max(self._chunk_chars, min_length - size))
                if not chunk:
                    logger.warning(f"Corpus stream for {self.book_entry.id} produced no text")
                    break
                parts.append(chunk)
                size += len(chunk)

            return "".join(parts)

    def create_initial_buffer(self, min_length: int = DEFAULT_INITIAL_BUFFER_CHARS) -> str:
        """Build the first buffer for a fresh session."""
        return self.ensure_length("", min_length)

    def __repr__(self) -> str:
        return (
            f"CorpusSessionStream(book='{self.book_entry.id}', "
            f"cursor={self.cursor}, length={len(self.book_text)}, wraps={self.wrap_count})"
        )
