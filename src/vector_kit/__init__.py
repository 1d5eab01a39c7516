# Config
from .config import VectorKitConfig

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Vector stores
from .vectorstores import (
    BatchInsertError,
    BatchInsertResult,
    DimensionMismatchError,
    InMemoryBackend,
    InvalidInputError,
    NotFoundError,
    PersistenceBackend,
    PersistenceError,
    SearchResult,
    SimilaritySearchEngine,
    SQLiteBackend,
    VectorRecord,
    VectorRecordStore,
    VectorStoreError,
    cosine_similarity,
    create_backend,
    dot,
    l2_norm,
)

__all__ = [
    # Config
    "VectorKitConfig",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Vector stores
    "BatchInsertError",
    "BatchInsertResult",
    "DimensionMismatchError",
    "InMemoryBackend",
    "InvalidInputError",
    "NotFoundError",
    "PersistenceBackend",
    "PersistenceError",
    "SQLiteBackend",
    "SearchResult",
    "SimilaritySearchEngine",
    "VectorRecord",
    "VectorRecordStore",
    "VectorStoreError",
    "cosine_similarity",
    "create_backend",
    "dot",
    "l2_norm",
]
