"""Protocol for corpus resource fetchers."""

from typing import Any, Protocol


class TextFetcher(Protocol):
    """Interface for anything that can serve corpus resources by path.

    Paths are the absolute resource paths used in the corpus index,
    e.g. ``/corpus/index.json`` or ``/corpus/books/emma.txt``.
    """

    def fetch_text(self, path: str) -> str:
        """Fetch a resource as UTF-8 text.

        Args:
            path: Resource path

        Returns:
            Decoded body text

        Raises:
            CorpusFetchError: If the resource cannot be fetched
        """
        ...

    def fetch_json(self, path: str) -> Any:
        """Fetch a resource and parse it as JSON.

        Raises:
            CorpusFetchError: If the resource cannot be fetched or parsed
        """
        ...

    def close(self) -> None:
        """Release any connections held by the fetcher."""
        ...
