"""Business logic services for Ambitype."""

from .book_text_service import BookTextCache
from .corpus_index_service import CorpusIndexLoader
from .corpus_session_service import CorpusSessionService, pick_random_book_entry
from .corpus_stream import CorpusSessionStream, find_safe_boundary, pick_random_start_offset
from .factory import create_corpus_session_service
from .fetchers import HttpTextFetcher, LocalTextFetcher, create_fetcher
from .filler_text import FillerTextGenerator
from .single_flight import SingleFlightCache

__all__ = [
    "BookTextCache",
    "CorpusIndexLoader",
    "CorpusSessionService",
    "CorpusSessionStream",
    "FillerTextGenerator",
    "HttpTextFetcher",
    "LocalTextFetcher",
    "SingleFlightCache",
    "create_corpus_session_service",
    "create_fetcher",
    "find_safe_boundary",
    "pick_random_book_entry",
    "pick_random_start_offset",
]
