"""Typed errors raised by the record store, the search engine and the backends."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import BatchInsertResult


class VectorStoreError(Exception):
    """Base class for every error raised by vector-kit."""


class InvalidInputError(VectorStoreError, ValueError):
    """A vector was empty, non-numeric or contained non-finite values."""


class NotFoundError(VectorStoreError, KeyError):
    def __init__(self, record_id: int) -> None:
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"Vector {self.record_id} not found"


class DimensionMismatchError(VectorStoreError, ValueError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class PersistenceError(VectorStoreError, RuntimeError):
    """The persistence backend could not complete a read or write."""


class BatchInsertError(PersistenceError):
    """A persistence failure stopped a batch insert part way through.

    `result` holds the ids stored before the failure and the elements
    rejected so far; nothing already stored is rolled back.
    """

    def __init__(self, message: str, result: "BatchInsertResult") -> None:
        super().__init__(message)
        self.result = result
