"""
Local File Storage Implementation

Each key is stored as `<data_dir>/<key>.json`. Writes go to a temporary
file in the same directory which is then renamed over the target, so a
crash mid-write leaves the previous document intact.

TRADEOFFS:
- Not suitable for large collections (we rewrite the whole document)
- No locking between processes (single user, single process)
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from expense_tracker.services.storage.interface import (
    DocumentStorageInterface,
    StorageReadError,
    StorageWriteError,
)


_VALID_KEY = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class LocalFileStorage(DocumentStorageInterface):
    """Stores one UTF-8 JSON file per key inside a data directory."""

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        # Keys become file names, so path separators are never allowed.
        if not _VALID_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, document: str) -> None:
        path = self._path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(document)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {path}: {e}") from e
