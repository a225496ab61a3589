"""Key-value storage backends for the persisted user document."""

import logging
from pathlib import Path
from typing import Dict, Optional

from src.roster_manager.config import USER_DATA_DIR
from src.roster_manager.errors import StorageUnavailableError, StorageWriteError

logger = logging.getLogger(__name__)


class FileStorageBackend:
    """Stores each key as a ``<key>.json`` file in a directory."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = Path(storage_dir) if storage_dir else USER_DATA_DIR
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            self._available = True
        except OSError as e:
            logger.warning("Storage directory %s unusable: %s", self.storage_dir, e)
            self._available = False

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def is_available(self) -> bool:
        return self._available

    def read(self, key: str) -> Optional[str]:
        """Return the stored text for ``key``, or None if absent."""
        if not self._available:
            raise StorageUnavailableError(f"Storage directory unusable: {self.storage_dir}")

        filepath = self._path(key)
        if not filepath.exists():
            return None

        with open(filepath, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, key: str, text: str) -> None:
        if not self._available:
            raise StorageUnavailableError(f"Storage directory unusable: {self.storage_dir}")

        filepath = self._path(key)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {filepath}: {e}") from e

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if something was deleted."""
        if not self._available:
            raise StorageUnavailableError(f"Storage directory unusable: {self.storage_dir}")

        filepath = self._path(key)
        if not filepath.exists():
            return False

        filepath.unlink()
        return True


class InMemoryStorageBackend:
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def is_available(self) -> bool:
        return True

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
