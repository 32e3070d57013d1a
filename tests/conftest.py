"""Pytest configuration and shared fixtures."""

import json
import random
import threading
import time

import pytest

from ambitype.config import AmbitypeConfig
from ambitype.exceptions import CorpusFetchError
from ambitype.presenters import NullPresenter

BOOK_WORDS = [
    "the",
    "quiet",
    "river",
    "wandered",
    "past",
    "old",
    "stone",
    "walls",
    "and",
    "into",
    "amber",
    "evening",
    "light.",
    "She",
    "said,",
    "nothing",
    "at",
    "all;",
]


def build_book_text(length: int) -> str:
    """Build normalized prose of exactly ``length`` characters ending in a letter."""
    words = []
    size = 0
    i = 0
    while size < length + 20:
        word = BOOK_WORDS[i % len(BOOK_WORDS)]
        words.append(word)
        size += len(word) + 1
        i += 1
    text = " ".join(words)[:length]
    if text.endswith(" "):
        text = text[:-1] + "x"
    return text


class FakeFetcher:
    """In-memory TextFetcher that records every request."""

    def __init__(self, resources=None, delay: float = 0.0):
        self.resources = dict(resources or {})
        self.delay = delay
        self.calls: list[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def fetch_text(self, path: str) -> str:
        with self._lock:
            self.calls.append(path)
        if self.delay:
            time.sleep(self.delay)

        value = self.resources.get(path)
        if value is None:
            raise CorpusFetchError(path, f"Failed to fetch {path} (404)", status_code=404)
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_json(self, path: str):
        return json.loads(self.fetch_text(path))

    def call_count(self, path: str) -> int:
        with self._lock:
            return self.calls.count(path)

    def close(self) -> None:
        self.closed = True


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def make_book_text():
    """Factory fixture for normalized book text of an exact length."""
    return build_book_text


@pytest.fixture
def rng():
    """Provide a seeded random source for repeatable offsets."""
    return random.Random(1234)


@pytest.fixture
def fake_clock():
    """Provide a controllable millisecond clock."""
    return FakeClock()


@pytest.fixture
def make_fetcher():
    """Factory fixture for a fake fetcher serving an index and its books.

    ``books`` maps slug to raw text; the index lists them in order.
    """

    def _make(books=None, extra_entries=None, delay=0.0):
        books = books or {}
        index = [
            {"id": slug, "title": slug.replace("-", " ").title(), "path": f"/corpus/books/{slug}.txt"}
            for slug in books
        ]
        index.extend(extra_entries or [])
        resources = {"/corpus/index.json": json.dumps(index)}
        for slug, text in books.items():
            resources[f"/corpus/books/{slug}.txt"] = text
        return FakeFetcher(resources, delay=delay)

    return _make


@pytest.fixture
def test_config(tmp_path):
    """Provide a configuration with small buffers suited to tests."""
    return AmbitypeConfig(
        corpus_dir=tmp_path / "public",
        tail_guard_chars=200,
        initial_buffer_chars=2000,
        append_chunk_chars=300,
        buffer_ahead_chars=100,
        buffer_extension_step=200,
    )


@pytest.fixture
def null_presenter():
    """Provide a null presenter for testing (no output)."""
    return NullPresenter()


class RecordingPresenter:
    """A real PresenterProtocol implementation that records all calls for assertion."""

    def __init__(self):
        self.infos = []
        self.successes = []
        self.warnings = []
        self.errors = []
        self.books = []
        self.texts = []

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_success(self, message: str) -> None:
        self.successes.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_books(self, entries) -> None:
        self.books.extend(entries)

    def show_text(self, text: str) -> None:
        self.texts.append(text)


@pytest.fixture
def recording_presenter():
    """Provide a presenter that records all calls for assertion."""
    return RecordingPresenter()


@pytest.fixture
def sample_raw_book():
    """Raw book text as written by the extraction pipeline (paragraphs, smart punctuation)."""
    paragraph = (
        "“It is a truth universally acknowledged,” said she—quite calmly—"
        "‘that a single man in possession of a good fortune must be in want of a wife.’"
    )
    return "\r\n\r\n".join([paragraph] * 40) + "\n"


@pytest.fixture
def corpus_dir(tmp_path, sample_raw_book):
    """Create a local web root with a two-book corpus and one broken index entry."""
    root = tmp_path / "public"
    books_dir = root / "corpus" / "books"
    books_dir.mkdir(parents=True)

    (books_dir / "pride-and-prejudice.txt").write_text(sample_raw_book, encoding="utf-8")
    (books_dir / "river-song.txt").write_text(build_book_text(5000), encoding="utf-8")

    index = [
        {
            "id": "pride-and-prejudice",
            "title": "Pride and Prejudice",
            "path": "/corpus/books/pride-and-prejudice.txt",
            "bytes": len(sample_raw_book.encode("utf-8")),
        },
        {"id": "river-song", "title": "River Song", "path": "/corpus/books/river-song.txt"},
        {"id": "broken", "path": "books/broken.txt"},
    ]
    (root / "corpus" / "index.json").write_text(json.dumps(index), encoding="utf-8")
    return root
