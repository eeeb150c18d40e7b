"""Storage adapters for draft and listing persistence."""

from autoconnex.storage.base import StorageAdapter
from autoconnex.storage.file import JsonFileStorage
from autoconnex.storage.memory import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageAdapter",
]
