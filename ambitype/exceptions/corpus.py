"""Corpus loading exceptions."""

from .base import AmbitypeException


class CorpusFetchError(AmbitypeException):
    """Raised when a corpus resource cannot be fetched."""

    def __init__(self, path: str, message: str, status_code: int | None = None):
        self.path = path
        self.status_code = status_code
        super().__init__(message)


class IndexUnavailableError(AmbitypeException):
    """Raised when the corpus index is missing, malformed or empty."""

    pass


class BookUnavailableError(AmbitypeException):
    """Raised when a corpus book cannot be loaded."""

    pass


class BookTooShortError(BookUnavailableError):
    """Raised when a normalized corpus book is below the length floor."""

    pass


class InvalidEntryError(AmbitypeException):
    """Raised when a corpus index entry has no usable book path."""

    pass
