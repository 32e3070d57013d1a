"""Service for loading the corpus index."""

import logging
import re
from typing import Any

from ambitype.exceptions import CorpusFetchError, IndexUnavailableError, InvalidEntryError
from ambitype.interfaces import TextFetcher
from ambitype.models import CorpusIndexEntry
from ambitype.services.single_flight import SingleFlightCache

logger = logging.getLogger(__name__)

BOOK_PATH_PATTERN = re.compile(r"^/corpus/books/([a-z0-9-]+)\.txt$")


def is_valid_book_path(path: Any) -> bool:
    """Check that a value is a corpus book path like ``/corpus/books/<slug>.txt``."""
    return isinstance(path, str) and BOOK_PATH_PATTERN.match(path) is not None


def parse_index_entry(raw: Any) -> CorpusIndexEntry:
    """Build an index entry from one JSON object of the index.

    Args:
        raw: Decoded JSON value

    Returns:
        Parsed entry; ``id`` defaults to the slug in the path

    Raises:
        InvalidEntryError: If the value is not an object with a valid book path
    """
    if not isinstance(raw, dict):
        raise InvalidEntryError(f"Corpus entry is not an object: {raw!r}")

    path = raw.get("path")
    if not is_valid_book_path(path):
        raise InvalidEntryError(f"Invalid corpus entry path: {path!r}")

    slug = BOOK_PATH_PATTERN.match(path).group(1)
    entry_id = raw.get("id") if isinstance(raw.get("id"), str) and raw.get("id") else slug
    title = raw.get("title") if isinstance(raw.get("title"), str) else ""
    size = raw.get("bytes")

    return CorpusIndexEntry(
        id=entry_id,
        path=path,
        title=title,
        bytes=size if isinstance(size, int) and not isinstance(size, bool) else None,
    )


class CorpusIndexLoader:
    """Load and validate the corpus index once per process.

    Concurrent callers share a single fetch. A failed load is not
    remembered, so a later call retries.
    """

    CACHE_KEY = "corpus-index"

    def __init__(
        self,
        fetcher: TextFetcher,
        index_path: str = "/corpus/index.json",
        cache: SingleFlightCache | None = None,
    ):
        """Initialize the index loader.

        Args:
            fetcher: Source of corpus resources
            index_path: Resource path of the index manifest
            cache: Memo for the loaded index (a private one by default)
        """
        self._fetcher = fetcher
        self._index_path = index_path
        self._cache = cache if cache is not None else SingleFlightCache("corpus-index")

    def load(self) -> tuple[CorpusIndexEntry, ...]:
        """Return the validated index, fetching it on first use.

        Returns:
            Entries in index order, invalid ones removed

        Raises:
            IndexUnavailableError: If the index cannot be fetched or has no valid entries
        """
        return self._cache.get_or_fetch((self.CACHE_KEY, self._index_path), self._fetch_index)

    def is_loaded(self) -> bool:
        """Check if a successfully loaded index is memoized."""
        return (self.CACHE_KEY, self._index_path) in self._cache

    def reset(self) -> None:
        """Drop the memoized index so the next load fetches again."""
        self._cache.discard((self.CACHE_KEY, self._index_path))

    def _fetch_index(self) -> tuple[CorpusIndexEntry, ...]:
        try:
            raw_index = self._fetcher.fetch_json(self._index_path)
        except CorpusFetchError as e:
            raise IndexUnavailableError(f"Failed to fetch corpus index: {e}") from e

        if not isinstance(raw_index, list) or not raw_index:
            raise IndexUnavailableError("Corpus index is empty or invalid.")

        entries: list[CorpusIndexEntry] = []
        seen_paths: set[str] = set()
        skipped = 0

        for raw in raw_index:
            try:
                entry = parse_index_entry(raw)
            except InvalidEntryError as e:
                logger.warning(f"Skipping corpus entry: {e}")
                skipped += 1
                continue

            if entry.path in seen_paths:
                logger.warning(f"Skipping duplicate corpus entry: {entry.path}")
                skipped += 1
                continue

            seen_paths.add(entry.path)
            entries.append(entry)

        if not entries:
            raise IndexUnavailableError("Corpus index has no valid entries.")

        logger.info(f"Loaded corpus index with {len(entries)} books ({skipped} skipped)")
        return tuple(entries)
