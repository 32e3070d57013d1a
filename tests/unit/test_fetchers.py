"""Tests for the HTTP and filesystem corpus fetchers."""

from unittest.mock import MagicMock

import pytest
import requests

from ambitype.config import AmbitypeConfig
from ambitype.exceptions import CorpusFetchError
from ambitype.services.fetchers import HttpTextFetcher, LocalTextFetcher, create_fetcher


def _response(ok=True, status_code=200, text="", json_data=None, json_error=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


# ---------------------------------------------------------------------------
# HttpTextFetcher
# ---------------------------------------------------------------------------


class TestHttpTextFetcher:
    """Tests for HttpTextFetcher."""

    def test_url_for_joins_base_and_path(self):
        """Should join the base URL and resource path with exactly one slash."""
        fetcher = HttpTextFetcher("http://127.0.0.1:5173/", session=MagicMock())
        assert fetcher.url_for("/corpus/index.json") == "http://127.0.0.1:5173/corpus/index.json"
        assert fetcher.url_for("corpus/books/a.txt") == "http://127.0.0.1:5173/corpus/books/a.txt"

    def test_fetch_text(self):
        """Should GET the resource with the timeout and decode as UTF-8."""
        session = MagicMock()
        response = _response(text="Once upon a time")
        session.get.return_value = response
        fetcher = HttpTextFetcher("http://example.test", timeout=3.5, session=session)

        assert fetcher.fetch_text("/corpus/books/a.txt") == "Once upon a time"
        session.get.assert_called_once_with("http://example.test/corpus/books/a.txt", timeout=3.5)
        assert response.encoding == "utf-8"

    def test_fetch_json(self):
        """Should return the decoded JSON body."""
        session = MagicMock()
        session.get.return_value = _response(json_data=[{"path": "/corpus/books/a.txt"}])
        fetcher = HttpTextFetcher("http://example.test", session=session)

        assert fetcher.fetch_json("/corpus/index.json") == [{"path": "/corpus/books/a.txt"}]

    def test_invalid_json(self):
        """Should wrap a JSON decode failure in CorpusFetchError."""
        session = MagicMock()
        session.get.return_value = _response(json_error=ValueError("Expecting value"))
        fetcher = HttpTextFetcher("http://example.test", session=session)

        with pytest.raises(CorpusFetchError, match="Invalid JSON"):
            fetcher.fetch_json("/corpus/index.json")

    def test_http_error_status(self):
        """Should raise CorpusFetchError carrying the status code."""
        session = MagicMock()
        session.get.return_value = _response(ok=False, status_code=404)
        fetcher = HttpTextFetcher("http://example.test", session=session)

        with pytest.raises(CorpusFetchError) as exc_info:
            fetcher.fetch_text("/corpus/books/missing.txt")

        assert exc_info.value.status_code == 404
        assert exc_info.value.path == "/corpus/books/missing.txt"
        assert "404" in str(exc_info.value)

    def test_timeout(self):
        """Should report a timeout as CorpusFetchError."""
        session = MagicMock()
        session.get.side_effect = requests.exceptions.Timeout("slow")
        fetcher = HttpTextFetcher("http://example.test", session=session)

        with pytest.raises(CorpusFetchError, match="Timed out"):
            fetcher.fetch_text("/corpus/index.json")

    def test_connection_error(self):
        """Should report transport failures as CorpusFetchError."""
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        fetcher = HttpTextFetcher("http://example.test", session=session)

        with pytest.raises(CorpusFetchError) as exc_info:
            fetcher.fetch_text("/corpus/index.json")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_close(self):
        """Should close the underlying session."""
        session = MagicMock()
        HttpTextFetcher("http://example.test", session=session).close()
        session.close.assert_called_once()


# ---------------------------------------------------------------------------
# LocalTextFetcher
# ---------------------------------------------------------------------------


class TestLocalTextFetcher:
    """Tests for LocalTextFetcher."""

    def test_reads_book_text(self, corpus_dir, sample_raw_book):
        fetcher = LocalTextFetcher(corpus_dir)
        text = fetcher.fetch_text("/corpus/books/pride-and-prejudice.txt")
        assert text.replace("\r\n", "\n") == sample_raw_book.replace("\r\n", "\n")

    def test_reads_index_json(self, corpus_dir):
        index = LocalTextFetcher(corpus_dir).fetch_json("/corpus/index.json")
        assert [entry["id"] for entry in index] == ["pride-and-prejudice", "river-song", "broken"]

    def test_missing_file_is_404(self, corpus_dir):
        with pytest.raises(CorpusFetchError) as exc_info:
            LocalTextFetcher(corpus_dir).fetch_text("/corpus/books/nope.txt")
        assert exc_info.value.status_code == 404

    def test_rejects_paths_outside_root(self, corpus_dir):
        (corpus_dir.parent / "secret.txt").write_text("hidden", encoding="utf-8")
        with pytest.raises(CorpusFetchError, match="outside"):
            LocalTextFetcher(corpus_dir).fetch_text("/../secret.txt")

    def test_invalid_json(self, corpus_dir):
        (corpus_dir / "corpus" / "bad.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorpusFetchError, match="Invalid JSON"):
            LocalTextFetcher(corpus_dir).fetch_json("/corpus/bad.json")

    def test_invalid_utf8(self, corpus_dir):
        (corpus_dir / "corpus" / "books" / "latin1.txt").write_bytes(b"caf\xe9")
        with pytest.raises(CorpusFetchError):
            LocalTextFetcher(corpus_dir).fetch_text("/corpus/books/latin1.txt")

    def test_close_keeps_fetcher_usable(self, corpus_dir):
        fetcher = LocalTextFetcher(corpus_dir)
        fetcher.close()
        assert fetcher.fetch_json("/corpus/index.json")


# ---------------------------------------------------------------------------
# create_fetcher
# ---------------------------------------------------------------------------


class TestCreateFetcher:
    """Tests for create_fetcher."""

    def test_local_when_corpus_dir_set(self, tmp_path):
        """Should read from disk when a corpus directory is configured."""
        assert isinstance(create_fetcher(AmbitypeConfig(corpus_dir=tmp_path)), LocalTextFetcher)

    def test_http_by_default(self):
        """Should use HTTP against the configured base URL otherwise."""
        fetcher = create_fetcher(AmbitypeConfig(corpus_base_url="http://books.test"))
        try:
            assert isinstance(fetcher, HttpTextFetcher)
            assert fetcher.url_for("/corpus/index.json") == "http://books.test/corpus/index.json"
        finally:
            fetcher.close()
