import logging
from collections.abc import Iterable
from time import monotonic

from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook

from ._rwlock import ReadWriteLock
from .errors import (
    BatchInsertError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
)
from .persistence.base import PersistenceBackend
from .similarity import validate_values
from .types import BatchInsertResult, VectorRecord

logger = logging.getLogger(__name__)


class VectorRecordStore:
    """Uniquely keyed container of vectors over a persistence backend.

    One instance is shared by every request in the process. Mutations hold
    an exclusive lock; lookups and enumeration share a read lock, so a search
    never observes a half-applied insert, update or delete. A mutation
    returns only after the backend has acknowledged the write.

    Records handed out are frozen dataclasses holding tuples, so callers
    cannot change stored data outside this API.

    The API is synchronous and blocking; async callers wrap calls in
    `asyncio.to_thread`, as `vector_kit.api` does.

    Example:
        >>> store = VectorRecordStore(InMemoryBackend())
        >>> record_id = store.insert([1.0, 0.0])
        >>> store.get(record_id).values
        (1.0, 0.0)
    """

    def __init__(
        self,
        backend: PersistenceBackend,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._backend = backend
        self._lock = ReadWriteLock()
        self.metrics_hook = metrics_hook

    def insert(self, values: Iterable[float]) -> int:
        """
        Store a new vector.

        Returns:
            The id assigned by the backend.

        Raises:
            InvalidInputError: If `values` is empty or not a finite real vector.
            PersistenceError: If the backend write fails.
        """
        start = monotonic()
        validated = validate_values(values)

        with self._lock.write():
            record_id = self._backend.add(validated)
            total = self._backend.count()

        self._record_mutation("insert", names.STORE_INSERT_DURATION, start, total)
        logger.debug("Inserted vector %d (dimension=%d)", record_id, len(validated))
        return record_id

    def insert_batch(self, batch: Iterable[Iterable[float]]) -> BatchInsertResult:
        """
        Insert every vector of `batch` independently.

        Best effort: a rejected element is recorded in the result and the
        remaining elements are still attempted. Nothing is rolled back.

        Raises:
            BatchInsertError: If the backend fails. The batch stops there and
                the error carries the partial result, including the ids
                already stored.
        """
        result = BatchInsertResult()
        for index, values in enumerate(batch):
            try:
                result.inserted_ids.append(self.insert(values))
            except InvalidInputError as exc:
                logger.warning("Skipping batch element %d: %s", index, exc)
                result.failures[index] = exc
            except PersistenceError as exc:
                result.failures[index] = exc
                raise BatchInsertError(
                    f"Batch insert stopped at element {index}: {exc}", result
                ) from exc

        logger.info(
            "Batch insert stored %d vectors, rejected %d",
            len(result.inserted_ids),
            len(result.failures),
        )
        return result

    def update(self, record_id: int, values: Iterable[float]) -> bool:
        """
        Replace the vector stored under `record_id`. No partial update.

        Raises:
            InvalidInputError: If `values` is empty or not a finite real vector.
            NotFoundError: If no record has that id.
            PersistenceError: If the backend write fails.
        """
        start = monotonic()
        validated = validate_values(values)

        with self._lock.write():
            if self._backend.get(record_id) is None:
                self.metrics_hook.increment(
                    names.STORE_ERRORS_TOTAL, labels={"operation": "update"}
                )
                raise NotFoundError(record_id)
            self._backend.put(VectorRecord(id=record_id, values=validated))
            total = self._backend.count()

        self._record_mutation("update", names.STORE_UPDATE_DURATION, start, total)
        logger.debug("Updated vector %d (dimension=%d)", record_id, len(validated))
        return True

    def delete(self, record_id: int) -> bool:
        """
        Remove a record.

        Returns:
            False if nothing was deleted. Deleting a missing id is not an error.
        """
        start = monotonic()
        with self._lock.write():
            deleted = self._backend.delete(record_id)
            total = self._backend.count()

        self._record_mutation("delete", names.STORE_DELETE_DURATION, start, total)
        if deleted:
            logger.debug("Deleted vector %d", record_id)
        else:
            logger.debug("Delete of vector %d was a no-op", record_id)
        return deleted

    def get(self, record_id: int) -> VectorRecord:
        with self._lock.read():
            record = self._backend.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    def get_all(self) -> list[VectorRecord]:
        """Consistent snapshot of every record, in ascending id order."""
        start = monotonic()
        with self._lock.read():
            records = self._backend.scan_all()

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.STORE_SCAN_DURATION, elapsed_ms)
        logger.debug("Total vectors in store: %d", len(records))
        return records

    def count(self) -> int:
        with self._lock.read():
            return self._backend.count()

    def close(self) -> None:
        with self._lock.write():
            self._backend.close()

    def _record_mutation(
        self, operation: str, duration_name: str, start: float, total: int
    ) -> None:
        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(duration_name, elapsed_ms)
        self.metrics_hook.increment(
            names.STORE_OPERATIONS_TOTAL, labels={"operation": operation}
        )
        self.metrics_hook.record_gauge(names.STORE_RECORDS, total)
