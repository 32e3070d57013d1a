"""Corpus fetcher implementations."""

from ambitype.config import AmbitypeConfig
from ambitype.interfaces import TextFetcher

from .http_fetcher import HttpTextFetcher
from .local_fetcher import LocalTextFetcher


def create_fetcher(config: AmbitypeConfig) -> TextFetcher:
    """Pick the local fetcher when a corpus directory is configured, HTTP otherwise."""
    if config.corpus_dir is not None:
        return LocalTextFetcher(config.corpus_dir)
    return HttpTextFetcher(config.corpus_base_url, timeout=config.request_timeout)


__all__ = ["HttpTextFetcher", "LocalTextFetcher", "create_fetcher"]
