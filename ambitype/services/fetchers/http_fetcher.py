"""HTTP corpus fetcher."""

import logging
from typing import Any

import requests

from ambitype.exceptions import CorpusFetchError

logger = logging.getLogger(__name__)


class HttpTextFetcher:
    """Fetch corpus resources over HTTP from a static file server.

    Implements TextFetcher protocol.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        """Initialize with the server root and request timeout.

        Args:
            base_url: Server root the corpus paths are relative to
            timeout: Seconds to wait for each request
            session: Optional requests session to reuse connections
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        """Build the absolute URL for a corpus resource path."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def fetch_text(self, path: str) -> str:
        """Fetch a resource as UTF-8 text.

        Raises:
            CorpusFetchError: On transport failure or a non-success status
        """
        response = self._get(path)
        response.encoding = "utf-8"
        return response.text

    def fetch_json(self, path: str) -> Any:
        """Fetch a resource and parse it as JSON.

        Raises:
            CorpusFetchError: On transport failure, a non-success status or invalid JSON
        """
        response = self._get(path)
        try:
            return response.json()
        except ValueError as e:
            raise CorpusFetchError(path, f"Invalid JSON in {path}: {e}") from e

    def _get(self, path: str) -> requests.Response:
        url = self.url_for(path)
        logger.debug(f"GET {url}")

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise CorpusFetchError(path, f"Timed out fetching {path}") from e
        except requests.RequestException as e:
            raise CorpusFetchError(path, f"Failed to fetch {path}: {e}") from e

        if not response.ok:
            raise CorpusFetchError(
                path,
                f"Failed to fetch {path} ({response.status_code})",
                status_code=response.status_code,
            )

        return response

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
