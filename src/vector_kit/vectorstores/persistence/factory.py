# src/vector_kit/vectorstores/persistence/factory.py

from vector_kit.config import VectorKitConfig

from .base import PersistenceBackend
from .memory import InMemoryBackend
from .sqlite import SQLiteBackend


def create_backend(config: VectorKitConfig) -> PersistenceBackend:
    """Create the persistence backend named by `config.backend`.

    Raises:
        ValueError: If the backend is unknown.
    """
    if config.backend == "sqlite":
        return SQLiteBackend(db_path=config.db_path)

    if config.backend == "memory":
        return InMemoryBackend()

    raise ValueError(f"Unknown persistence backend: {config.backend}")
