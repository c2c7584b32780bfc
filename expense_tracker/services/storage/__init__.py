"""
Storage Services Package

Provides the abstract document storage interface and concrete backends.
Local files are the default backend; the in-memory one backs tests.
"""

from expense_tracker.services.storage.interface import (
    DocumentStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from expense_tracker.services.storage.file_storage import LocalFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "DocumentStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Backends
    "InMemoryStorage",
    "LocalFileStorage",
]
