"""Presenter protocol for output abstraction."""

from typing import Protocol

from ambitype.models import CorpusIndexEntry


class PresenterProtocol(Protocol):
    """Interface for presenting output to the user.

    This protocol abstracts all output operations, allowing the same
    commands to work with different presentation layers.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message.

        Args:
            message: The informational message to display
        """
        ...

    def show_success(self, message: str) -> None:
        """Display a success message."""
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def show_books(self, entries: list[CorpusIndexEntry]) -> None:
        """Display the books available in the corpus index.

        Args:
            entries: Index entries in index order
        """
        ...

    def show_text(self, text: str) -> None:
        """Display a block of typing text verbatim."""
        ...

