"""Console presenter for CLI output."""

from ambitype.models import CorpusIndexEntry


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_books(self, entries: list[CorpusIndexEntry]) -> None:
        """Display the books available in the corpus index."""
        print(f"\nCorpus Books ({len(entries)}):")
        print("=" * 60)

        for i, entry in enumerate(entries, 1):
            size = f"{entry.bytes:,} bytes" if entry.bytes is not None else "size unknown"
            print(f"{i:3d}. {entry.id:30s} {entry.title or '-'} ({size})")

    def show_text(self, text: str) -> None:
        """Display a block of typing text verbatim."""
        print(text)

