"""Services package."""

from expense_tracker.services.storage import (
    DocumentStorageInterface,
    InMemoryStorage,
    LocalFileStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "DocumentStorageInterface",
    "InMemoryStorage",
    "LocalFileStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
