"""Key-value storage backends.

The wishlist persists through a minimal get/set-of-a-string surface so
that it can run against memory in tests and a JSON file on disk.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class StorageError(Exception):
    """Error reading or writing durable storage."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.message = message
        super().__init__(f"[{key}] {message}")


class KeyValueStorage(Protocol):
    """String key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


class InMemoryStorage:
    """Process-local storage, used by tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Durable storage in a single JSON object file.

    Every write rewrites the whole file through a temporary file and
    an atomic rename, so readers never observe a partial write.

    Example usage:
        storage = JsonFileStorage(Path("~/.storefront/storage.json").expanduser())
        storage.set("lm_wishlist", '["p1"]')
    """

    def __init__(self, path: Path) -> None:
        """Initialize file storage.

        Args:
            path: File holding the JSON object; created on first write.
        """
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as e:
            logger.warning("Storage file is not valid UTF-8", path=str(self.path), error=str(e))
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Storage file is not valid JSON", path=str(self.path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning("Storage file does not hold an object", path=str(self.path))
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        try:
            return self._read_all().get(key)
        except OSError as e:
            raise StorageError(key, f"Failed to read {self.path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(data, tmp, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(key, f"Failed to write {self.path}: {e}") from e
