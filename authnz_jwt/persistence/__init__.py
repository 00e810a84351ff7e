"""
Persistence module - JSON file storage

Provides:
- JSONStore: JSON documents on disk (read-only or atomic read/write)
"""

from .json_store import JSONStore, JSONStoreError, JSONStoreIOError, JSONStoreFormatError

__all__ = [
    "JSONStore",
    "JSONStoreError",
    "JSONStoreIOError",
    "JSONStoreFormatError",
]
