"""Local credential file storage.

The file holds the raw API key as its entire contents. Reads and writes
run in a worker thread so the event loop keeps serving other requests.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes the credential file. Last write wins."""

    def __init__(self, path: Path | str = ".credential") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> str | None:
        """Return the stored API key, or None if there is no readable file."""
        return await asyncio.to_thread(self._read)

    async def write(self, api_key: str) -> None:
        """Persist ``api_key``.

        Raises:
            CredentialWriteError: If the file cannot be written.
        """
        try:
            await asyncio.to_thread(self._path.write_text, api_key, encoding="utf-8")
        except OSError as e:
            raise CredentialWriteError(f"Could not write {self._path}: {e}", path=str(self._path)) from e
        logger.info("Saved credential to %s", self._path)

    def _read(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Could not read %s: %s", self._path, e)
            return None


class CredentialWriteError(Exception):
    """Raised when the credential file cannot be written."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
