"""Filesystem corpus fetcher."""

import json
import logging
from pathlib import Path
from typing import Any

from ambitype.exceptions import CorpusFetchError

logger = logging.getLogger(__name__)


class LocalTextFetcher:
    """Serve corpus resources from a directory laid out like the web root.

    ``/corpus/index.json`` resolves to ``<root>/corpus/index.json``.

    Implements TextFetcher protocol.
    """

    def __init__(self, root: Path):
        """Initialize with the directory that contains ``corpus/``.

        Args:
            root: Local web root
        """
        self._root = Path(root)

    def resolve(self, path: str) -> Path:
        """Map a resource path onto the local root.

        Raises:
            CorpusFetchError: If the path escapes the root directory
        """
        root = self._root.resolve()
        candidate = (root / path.lstrip("/")).resolve()
        if not candidate.is_relative_to(root):
            raise CorpusFetchError(path, f"Path outside corpus root: {path}")
        return candidate

    def fetch_text(self, path: str) -> str:
        file_path = self.resolve(path)
        logger.debug(f"Reading {file_path}")

        try:
            return file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CorpusFetchError(path, f"Failed to fetch {path} (404)", status_code=404) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusFetchError(path, f"Failed to read {path}: {e}") from e

    def fetch_json(self, path: str) -> Any:
        text = self.fetch_text(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorpusFetchError(path, f"Invalid JSON in {path}: {e}") from e

    def close(self) -> None:
        """Nothing to release; files are opened per read."""
