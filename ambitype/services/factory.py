"""Factory for wiring the corpus services together."""

import random

from ambitype.config import AmbitypeConfig
from ambitype.interfaces import TextFetcher
from ambitype.services.book_text_service import BookTextCache
from ambitype.services.corpus_index_service import CorpusIndexLoader
from ambitype.services.corpus_session_service import CorpusSessionService
from ambitype.services.fetchers import create_fetcher


def create_corpus_session_service(
    config: AmbitypeConfig,
    fetcher: TextFetcher | None = None,
    rng: random.Random | None = None,
) -> CorpusSessionService:
    """Create a session service with its own index memo and book cache.

    Args:
        config: Corpus and stream configuration
        fetcher: Resource fetcher (chosen from the config when omitted)
        rng: Random source for book choice and stream offsets

    Returns:
        Ready-to-use CorpusSessionService
    """
    fetcher = fetcher or create_fetcher(config)
    index_loader = CorpusIndexLoader(fetcher, index_path=config.corpus_index_path)
    book_cache = BookTextCache(fetcher, min_chars=config.min_book_chars)
    return CorpusSessionService(index_loader, book_cache, config=config, rng=rng)
