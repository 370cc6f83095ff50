"""Key-value stores - in-memory and JSON file backed (DI-friendly, no global singleton)."""

import contextlib
import json
import logging
import threading
from pathlib import Path

from resumate.domain.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_STORE_FILE = Path("output/store.json")


class MemoryKeyValueStore:
    """Process-local store. Used in tests and when no file is configured."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class FileKeyValueStore:
    """All keys in one JSON object on disk.

    Every read goes to disk so a writer in another process is seen by the
    next get(). Writes go to a temp file first, then an atomic rename.
    """

    def __init__(self, store_file: Path | str | None = None) -> None:
        """Initialize store; the file is created on first write."""
        self._file = Path(store_file) if store_file else DEFAULT_STORE_FILE
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._file

    def _read_all(self) -> dict[str, str]:
        if not self._file.exists():
            return {}
        try:
            raw = self._file.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot read store file {self._file}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupted store file {self._file}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Store root must be a JSON object: {self._file}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except PersistenceError:
                # Unreadable file is replaced rather than blocking every write.
                logger.warning("Overwriting unreadable store file %s", self._file, exc_info=True)
                data = {}
            data[key] = value
            tmp_file = self._file.with_suffix(".tmp")
            try:
                self._file.parent.mkdir(parents=True, exist_ok=True)
                tmp_file.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
                tmp_file.replace(self._file)
            except OSError as e:
                with contextlib.suppress(OSError):
                    tmp_file.unlink(missing_ok=True)
                raise PersistenceError(f"Cannot write store file {self._file}: {e}") from e
