"""Null presenter for testing (no output)."""

from ambitype.models import CorpusIndexEntry


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        pass

    def show_success(self, message: str) -> None:
        pass

    def show_warning(self, message: str) -> None:
        pass

    def show_error(self, message: str) -> None:
        pass

    def show_books(self, entries: list[CorpusIndexEntry]) -> None:
        pass

    def show_text(self, text: str) -> None:
        pass

