"""Interface protocols for Ambitype."""

from .presenter import PresenterProtocol
from .text_fetcher import TextFetcher
from .text_source import TextSource

__all__ = ["PresenterProtocol", "TextFetcher", "TextSource"]
