"""Service for loading and caching normalized book text."""

import logging

from ambitype.exceptions import (
    BookTooShortError,
    BookUnavailableError,
    CorpusFetchError,
    InvalidEntryError,
)
from ambitype.interfaces import TextFetcher
from ambitype.models import CorpusIndexEntry
from ambitype.services.corpus_index_service import is_valid_book_path
from ambitype.services.single_flight import SingleFlightCache
from ambitype.utils import normalize_book_text

logger = logging.getLogger(__name__)


class BookTextCache:
    """Fetch, normalize and memoize book text keyed by path.

    Book text is assumed immutable on the server, so a successful load is
    kept for the life of the cache. Failures (fetch errors, books below
    the length floor) are not kept and may be retried.
    """

    def __init__(
        self,
        fetcher: TextFetcher,
        min_chars: int = 500,
        cache: SingleFlightCache | None = None,
    ):
        """Initialize the book text cache.

        Args:
            fetcher: Source of corpus resources
            min_chars: Minimum normalized length for a usable book
            cache: Memo for loaded texts (a private one by default)
        """
        self._fetcher = fetcher
        self._min_chars = min_chars
        self._cache = cache if cache is not None else SingleFlightCache("book-text")

    def load(self, entry: CorpusIndexEntry) -> str:
        """Return the normalized text of a book.

        Args:
            entry: Index entry of the book

        Returns:
            Normalized book text

        Raises:
            InvalidEntryError: If the entry has no valid book path
            BookTooShortError: If the normalized text is below the length floor
            BookUnavailableError: If the book cannot be fetched
        """
        path = getattr(entry, "path", None)
        if not is_valid_book_path(path):
            raise InvalidEntryError(f"Invalid corpus entry: missing path ({entry!r})")

        return self._cache.get_or_fetch(path, lambda: self._fetch_book(path))

    def is_cached(self, entry: CorpusIndexEntry) -> bool:
        """Check if the book's text is already loaded."""
        return entry.path in self._cache

    def clear(self) -> None:
        """Drop every cached book."""
        self._cache.clear()

    def _fetch_book(self, path: str) -> str:
        try:
            raw_text = self._fetcher.fetch_text(path)
        except CorpusFetchError as e:
            raise BookUnavailableError(f"Failed to fetch corpus book {path}: {e}") from e

        text = normalize_book_text(raw_text)

        if len(text) < self._min_chars:
            raise BookTooShortError(
                f"Corpus book is too short: {path} ({len(text)} < {self._min_chars} chars)"
            )

        logger.info(f"Loaded corpus book {path} ({len(text)} chars)")
        return text
