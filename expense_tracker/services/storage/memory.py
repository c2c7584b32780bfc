"""In-memory storage, for tests and throwaway sessions."""

from typing import Optional

from expense_tracker.services.storage.interface import DocumentStorageInterface


class InMemoryStorage(DocumentStorageInterface):
    """Keeps documents in a dict. Nothing survives the process."""

    def __init__(self, documents: Optional[dict[str, str]] = None):
        self._documents: dict[str, str] = dict(documents or {})

    def read(self, key: str) -> Optional[str]:
        return self._documents.get(key)

    def write(self, key: str, document: str) -> None:
        self._documents[key] = document

    def remove(self, key: str) -> None:
        self._documents.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._documents)
