"""
Local filesystem blob store.
"""

import logging
import os
from pathlib import Path

from ..exceptions import StorageError
from .base import BlobStore


logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """
    Stores blobs as files below a root directory.

    Args:
        root (str | Path): Directory that holds every blob. Created on demand.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not str(target).startswith(str(self.root) + os.sep):
            raise StorageError(f"Path traversal detected: {path}")
        return target

    def save(self, path: str, content: bytes) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as err:
            raise StorageError(f"Could not write blob '{path}': {err}") from err

        logger.debug("Blob stored: %s (%s bytes)", path, len(content))
        return path

    def read(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as err:
            raise StorageError(f"Could not read blob '{path}': {err}") from err

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as err:
            raise StorageError(f"Could not delete blob '{path}': {err}") from err

        logger.debug("Blob deleted: %s", path)
