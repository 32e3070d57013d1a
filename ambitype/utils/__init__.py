"""Utility functions for Ambitype."""

from .text_utils import ends_with_whitespace, normalize_book_text

__all__ = [
    "normalize_book_text",
    "ends_with_whitespace",
]
