"""Text processing utilities."""

import re

ZERO_WIDTH_PATTERN = re.compile("[\u200b-\u200d\u2060\ufeff]")
UNICODE_SPACES_PATTERN = re.compile("[\u00a0\u1680\u2000-\u200a\u202f\u205f\u3000]")
SMART_DOUBLE_QUOTES_PATTERN = re.compile("[\u201c\u201d]")
SMART_SINGLE_QUOTES_PATTERN = re.compile("[\u2018\u2019]")
SMART_DASHES_PATTERN = re.compile("[\u2013\u2014\u2212]")
WHITESPACE_RUN_PATTERN = re.compile(r"\s+")


def normalize_book_text(raw_text: str | None) -> str:
    """Convert raw book text into one continuous line of plain text.

    Line breaks are flattened along with every other whitespace run, so
    paragraphs flow into each other separated by a single space.

    Args:
        raw_text: Raw plaintext as served by the corpus

    Returns:
        Normalized text; normalizing it again returns it unchanged
    """
    text = raw_text or ""
    text = text.replace("\r\n", "\n")

    # Invisible characters and exotic spaces
    text = ZERO_WIDTH_PATTERN.sub("", text)
    text = UNICODE_SPACES_PATTERN.sub(" ", text)

    # Typographic punctuation to what a keyboard can type
    text = SMART_DOUBLE_QUOTES_PATTERN.sub('"', text)
    text = SMART_SINGLE_QUOTES_PATTERN.sub("'", text)
    text = SMART_DASHES_PATTERN.sub("-", text)

    text = WHITESPACE_RUN_PATTERN.sub(" ", text)

    return text.strip()


def ends_with_whitespace(text: str) -> bool:
    """Check if text is non-empty and its last character is whitespace."""
    return bool(text) and text[-1].isspace()
