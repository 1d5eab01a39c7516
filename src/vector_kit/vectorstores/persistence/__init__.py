from .base import PersistenceBackend
from .factory import create_backend
from .memory import InMemoryBackend
from .sqlite import SQLiteBackend

__all__ = [
    "InMemoryBackend",
    "PersistenceBackend",
    "SQLiteBackend",
    "create_backend",
]
