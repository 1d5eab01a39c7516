from collections.abc import Sequence
from typing import Protocol

from ..types import VectorRecord


class PersistenceBackend(Protocol):
    """Durable key-value storage underneath `VectorRecordStore`.

    Backends own id assignment: `add` returns a fresh id that is never handed
    out again, even after the record is deleted. Backends are not required to
    be thread safe; the record store serialises writers.
    """

    def add(self, values: Sequence[float]) -> int: ...

    def put(self, record: VectorRecord) -> None:
        """Replace the values stored under `record.id`."""
        ...

    def get(self, record_id: int) -> VectorRecord | None: ...

    def delete(self, record_id: int) -> bool:
        """
        Remove a record.
        Returns False when no record had that id.
        """
        ...

    def scan_all(self) -> list[VectorRecord]:
        """Every stored record in ascending id order."""
        ...

    def count(self) -> int: ...

    def close(self) -> None: ...
