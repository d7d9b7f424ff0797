"""
Storage Services Package

Provides the abstract record store interface and its two interchangeable
implementations: in-memory and local JSON files.
"""

from dailyspend.services.storage.interface import (
    RecordStoreInterface,
    StorageError,
    ValidationError,
)
from dailyspend.services.storage.collection import (
    DEFAULT_CATEGORIES,
    CollectionRecordStore,
)
from dailyspend.services.storage.memory import InMemoryRecordStore
from dailyspend.services.storage.json_file import JsonFileRecordStore

__all__ = [
    # Interfaces
    "CollectionRecordStore",
    "RecordStoreInterface",
    # Exceptions
    "StorageError",
    "ValidationError",
    # Implementations
    "DEFAULT_CATEGORIES",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
]
