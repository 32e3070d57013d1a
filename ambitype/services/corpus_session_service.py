"""Service for building corpus practice sessions, with speculative preloading."""

import logging
import random
import threading
from collections.abc import Sequence
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass

from ambitype.config import AmbitypeConfig
from ambitype.exceptions import AmbitypeException, IndexUnavailableError
from ambitype.models import CorpusIndexEntry, CorpusSession
from ambitype.services.book_text_service import BookTextCache
from ambitype.services.corpus_index_service import CorpusIndexLoader
from ambitype.services.corpus_stream import CorpusSessionStream

logger = logging.getLogger(__name__)


def pick_random_book_entry(
    index: Sequence[CorpusIndexEntry], rng: random.Random | None = None
) -> CorpusIndexEntry:
    """Pick one entry uniformly at random.

    Raises:
        IndexUnavailableError: If the index is empty
    """
    if not index:
        raise IndexUnavailableError("Corpus index is empty or invalid.")
    return (rng or random).choice(index)


@dataclass
class _PendingPreload:
    generation: int
    initial_chars: int
    future: Future


class CorpusSessionService:
    """Create practice sessions and keep the next one warming in the background.

    At most one preload is pending at a time, keyed by the requested
    initial buffer size. Each preload is tagged with a generation number;
    only the generation that is still current may clear the pending slot,
    so a superseded preload finishing late never disturbs a newer one.
    """

    def __init__(
        self,
        index_loader: CorpusIndexLoader,
        book_cache: BookTextCache,
        config: AmbitypeConfig | None = None,
        rng: random.Random | None = None,
        executor: ThreadPoolExecutor | None = None,
    ):
        """Initialize the session service.

        Args:
            index_loader: Loader for the corpus index
            book_cache: Cache of normalized book text
            config: Stream and buffer settings
            rng: Random source for book choice and stream offsets
            executor: Executor for background preloads (a single worker by default)
        """
        self.config = config or AmbitypeConfig()
        self._index_loader = index_loader
        self._book_cache = book_cache
        self._rng = rng or random.Random()
        self._rng_lock = threading.Lock()
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._pending: _PendingPreload | None = None
        self._generation = 0

    def _resolve_size(self, initial_chars: int | None) -> int:
        return self.config.initial_buffer_chars if initial_chars is None else initial_chars

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="ambitype-preload"
            )
        return self._executor

    def create_corpus_session(self, initial_chars: int | None = None) -> CorpusSession:
        """Load the index, pick a random book and build its first buffer.

        Args:
            initial_chars: Minimum length of the initial buffer

        Returns:
            CorpusSession with the entry, its stream and the initial text

        Raises:
            IndexUnavailableError: If the index cannot be loaded
            BookUnavailableError: If the chosen book cannot be loaded
        """
        initial_chars = self._resolve_size(initial_chars)
        index = self._index_loader.load()

        with self._rng_lock:
            entry = pick_random_book_entry(index, self._rng)
            stream_rng = random.Random(self._rng.getrandbits(64))

        # No retry with another book; the caller falls back to filler text.
        text = self._book_cache.load(entry)

        stream = CorpusSessionStream(
            entry,
            text,
            rng=stream_rng,
            tail_guard=self.config.tail_guard_chars,
            chunk_chars=self.config.append_chunk_chars,
        )
        start_offset = stream.cursor
        initial_text = stream.create_initial_buffer(initial_chars)

        logger.info(
            f"Created corpus session from {entry.id} at offset "
            f"{start_offset} ({len(initial_text)} chars buffered)"
        )
        return CorpusSession(entry=entry, stream=stream, initial_text=initial_text)

    def preload_corpus_session(self, initial_chars: int | None = None) -> Future:
        """Start building the next session in the background.

        Returns the already pending future when one exists for the same size;
        a preload for a different size supersedes it.

        Args:
            initial_chars: Initial buffer size of the session to prepare

        Returns:
            Future resolving to a CorpusSession
        """
        initial_chars = self._resolve_size(initial_chars)

        with self._lock:
            pending = self._pending
            if pending is not None and pending.initial_chars == initial_chars:
                return pending.future

            if pending is not None:
                logger.debug(
                    f"Superseding preload for {pending.initial_chars} chars "
                    f"with {initial_chars} chars"
                )
                pending.future.cancel()

            self._generation += 1
            generation = self._generation
            future = self._get_executor().submit(self.create_corpus_session, initial_chars)
            self._pending = _PendingPreload(generation, initial_chars, future)

        future.add_done_callback(lambda done: self._on_preload_done(generation, done))
        return future

    def _on_preload_done(self, generation: int, future: Future) -> None:
        if future.cancelled():
            return

        error = future.exception()
        if error is None:
            return

        logger.warning(f"Corpus preload failed: {error}")
        with self._lock:
            if self._pending is not None and self._pending.generation == generation:
                self._pending = None

    def has_pending_preload(self, initial_chars: int | None = None) -> bool:
        """Check if a preload for this size is pending or ready."""
        initial_chars = self._resolve_size(initial_chars)
        with self._lock:
            return self._pending is not None and self._pending.initial_chars == initial_chars

    def consume_preloaded_corpus_session(self, initial_chars: int | None = None) -> CorpusSession:
        """Take the preloaded session if it matches, otherwise build one now.

        After handing out a session the next preload starts immediately.

        Args:
            initial_chars: Minimum length of the initial buffer

        Returns:
            CorpusSession ready for typing

        Raises:
            IndexUnavailableError: If a fresh build cannot load the index
            BookUnavailableError: If a fresh build cannot load the chosen book
        """
        initial_chars = self._resolve_size(initial_chars)

        with self._lock:
            pending = self._pending
            if pending is not None and pending.initial_chars == initial_chars:
                self._pending = None
            else:
                pending = None

        session = None
        if pending is not None:
            try:
                session = pending.future.result()
                logger.debug(f"Using preloaded corpus session ({session.entry.id})")
            except CancelledError:
                logger.debug("Preloaded corpus session was cancelled")
            except AmbitypeException as e:
                logger.warning(f"Preloaded corpus session failed, building a fresh one: {e}")

        if session is None:
            session = self.create_corpus_session(initial_chars)

        self._preload_next(initial_chars)
        return session

    def _preload_next(self, initial_chars: int) -> None:
        try:
            self.preload_corpus_session(initial_chars)
        except RuntimeError as e:
            # Executor already shut down
            logger.debug(f"Skipping next preload: {e}")

    def shutdown(self, wait: bool = False) -> None:
        """Cancel pending preloads and stop the background worker."""
        with self._lock:
            self._pending = None
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
