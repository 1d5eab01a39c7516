from .errors import (
    BatchInsertError,
    DimensionMismatchError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    VectorStoreError,
)
from .persistence import (
    InMemoryBackend,
    PersistenceBackend,
    SQLiteBackend,
    create_backend,
)
from .record_store import VectorRecordStore
from .search import SimilaritySearchEngine
from .similarity import cosine_similarity, dot, l2_norm
from .types import BatchInsertResult, SearchResult, VectorRecord

__all__ = [
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
