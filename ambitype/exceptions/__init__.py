"""Custom exceptions for Ambitype."""

from .base import AmbitypeException
from .corpus import (
    BookTooShortError,
    BookUnavailableError,
    CorpusFetchError,
    IndexUnavailableError,
    InvalidEntryError,
)

__all__ = [
    "AmbitypeException",
    "CorpusFetchError",
    "IndexUnavailableError",
    "BookUnavailableError",
    "BookTooShortError",
    "InvalidEntryError",
]
