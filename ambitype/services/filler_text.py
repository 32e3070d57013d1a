"""Placeholder prose used when the corpus cannot be loaded."""

import random

WORD_BANK = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit urna turpis tempus nulla "
    "libero imperdiet mauris iaculis faucibus pellentesque vestibulum magna justo "
    "suscipit augue neque dignissim viverra aliquam donec rutrum mattis quisque gravida "
    "curabitur phasellus blandit porta lectus sollicitudin fringilla efficitur placerat "
    "sapien fermentum volutpat elementum commodo tristique auctor pulvinar lacinia"
).split()

SENTENCE_ENDINGS = (".", ".", ".", ".", ".", "?")

DEFAULT_CHUNK_CHARS = 1200
DEFAULT_BUFFER_CHARS = 3200


class FillerTextGenerator:
    """Generate endless Latin placeholder paragraphs.

    Implements TextSource protocol, so a session can fall back to it
    wherever a corpus stream would be used.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def _sentence(self) -> str:
        word_count = self._rng.randint(8, 16)
        words = [self._rng.choice(WORD_BANK) for _ in range(word_count)]
        words[0] = words[0].capitalize()

        if word_count > 10 and self._rng.random() > 0.5:
            comma_position = self._rng.randint(3, word_count - 3)
            words[comma_position] = f"{words[comma_position]},"

        words[-1] = f"{words[-1]}{self._rng.choice(SENTENCE_ENDINGS)}"
        return " ".join(words)

    def _paragraph(self) -> str:
        sentence_count = self._rng.randint(3, 5)
        return " ".join(self._sentence() for _ in range(sentence_count)) + " "

    def generate_chunk(self, target_chars: int = DEFAULT_CHUNK_CHARS) -> str:
        """Generate whole paragraphs totalling at least ``target_chars`` characters."""
        parts: list[str] = []
        size = 0
        while size < target_chars:
            paragraph = self._paragraph()
            parts.append(paragraph)
            size += len(paragraph)
        return "".join(parts)

    def create_initial_buffer(self, min_length: int = DEFAULT_BUFFER_CHARS) -> str:
        return self.generate_chunk(min_length)

    def ensure_length(self, current_text: str, min_length: int) -> str:
        if len(current_text) >= min_length:
            return current_text

        parts = [current_text]
        size = len(current_text)
        while size < min_length:
            chunk = self.generate_chunk(DEFAULT_CHUNK_CHARS)
            parts.append(chunk)
            size += len(chunk)
        return "".join(parts)
