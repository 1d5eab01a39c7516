import itertools
import logging
from collections.abc import Sequence

from ..types import VectorRecord
from .base import PersistenceBackend

logger = logging.getLogger(__name__)


class InMemoryBackend(PersistenceBackend):
    """Process-local backend. Nothing survives `close()` or a restart."""

    def __init__(self) -> None:
        self._records: dict[int, VectorRecord] = {}
        self._ids = itertools.count(1)
        logger.info("Initialized InMemoryBackend")

    def add(self, values: Sequence[float]) -> int:
        record_id = next(self._ids)
        self._records[record_id] = VectorRecord(id=record_id, values=tuple(values))
        return record_id

    def put(self, record: VectorRecord) -> None:
        self._records[record.id] = record

    def get(self, record_id: int) -> VectorRecord | None:
        return self._records.get(record_id)

    def delete(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    def scan_all(self) -> list[VectorRecord]:
        # ids are handed out in increasing order and dicts keep insertion order
        return list(self._records.values())

    def count(self) -> int:
        return len(self._records)

    def close(self) -> None:
        self._records.clear()
