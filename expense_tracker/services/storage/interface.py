"""
Abstract Storage Interface

DESIGN DECISION: Durable storage is a plain key/value store of JSON text
documents, the same shape as browser local storage. This allows us to:
1. Keep expenses and settings as two independently keyed documents
2. Use in-memory storage for testing
3. Swap the local file backend for something else later
4. Keep serialization in the stores, not in the backend

The interface is intentionally tiny. Every write is a full overwrite of
one document; there is no partial update and no schema versioning.
"""

from abc import ABC, abstractmethod
from typing import Optional


class DocumentStorageInterface(ABC):
    """
    Abstract interface for document storage.

    Any backend (local files, in-memory, ...) must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the document stored under a key.

        Args:
            key: Storage key (e.g., 'personal-expenses')

        Returns:
            The stored text, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, document: str) -> None:
        """
        Replace the document stored under a key.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove the document stored under a key. Missing keys are ignored.

        Raises:
            StorageError: If the removal fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A stored document could not be read."""
    pass


class StorageWriteError(StorageError):
    """A document could not be written or removed."""
    pass
