"""SQLite persistence backend built on apsw."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import apsw
import numpy as np

from ..errors import PersistenceError
from ..types import VectorRecord
from .base import PersistenceBackend

logger = logging.getLogger(__name__)

# Little-endian float64 so stored values round-trip bit for bit
_EMBEDDING_DTYPE = np.dtype("<f8")


def _serialize(values: Sequence[float]) -> bytes:
    return np.asarray(values, dtype=_EMBEDDING_DTYPE).tobytes()


def _deserialize(blob: bytes) -> tuple[float, ...]:
    return tuple(np.frombuffer(blob, dtype=_EMBEDDING_DTYPE).tolist())


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except apsw.Error as exc:
        logger.error("SQLite %s failed: %s", operation, exc)
        raise PersistenceError(f"SQLite {operation} failed: {exc}") from exc


class SQLiteBackend(PersistenceBackend):
    """Persistence backend storing one row per vector in a SQLite file.

    Ids come from an AUTOINCREMENT primary key, so SQLite never reuses the id
    of a deleted row, not even after the file is reopened. apsw runs in
    autocommit mode: every statement is committed before the call returns.

    Example:
        >>> backend = SQLiteBackend(db_path="VectorDB.db")
        >>> record_id = backend.add([0.1, 0.2, 0.3])
        >>> backend.get(record_id)
        VectorRecord(id=1, values=(0.1, 0.2, 0.3))
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        """
        Open or create the database file.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        self._db_path = str(db_path)
        self._conn: apsw.Connection | None = None
        self._closed = False
        with _translate_errors("open"):
            self._get_connection()
        logger.info("Initialized SQLiteBackend with db_path=%s", self._db_path)

    def _get_connection(self) -> apsw.Connection:
        if self._closed:
            raise PersistenceError(f"SQLiteBackend at {self._db_path} is closed")
        if self._conn is None:
            self._conn = apsw.Connection(self._db_path)
            self._initialize_schema(self._conn)
        return self._conn

    @staticmethod
    def _initialize_schema(conn: apsw.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS vectors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                dimension INTEGER NOT NULL,
                embedding BLOB NOT NULL
            )
            """
        )

    def add(self, values: Sequence[float]) -> int:
        with _translate_errors("insert"):
            conn = self._get_connection()
            conn.execute(
                "INSERT INTO vectors(dimension, embedding) VALUES (?, ?)",
                (len(values), _serialize(values)),
            )
            record_id: int = conn.last_insert_rowid()
        logger.debug("Inserted vector %d (dimension=%d)", record_id, len(values))
        return record_id

    def put(self, record: VectorRecord) -> None:
        with _translate_errors("update"):
            conn = self._get_connection()
            conn.execute(
                "UPDATE vectors SET dimension = ?, embedding = ? WHERE id = ?",
                (record.dimension, _serialize(record.values), record.id),
            )

    def get(self, record_id: int) -> VectorRecord | None:
        with _translate_errors("get"):
            rows = list(
                self._get_connection().execute(
                    "SELECT id, embedding FROM vectors WHERE id = ?", (record_id,)
                )
            )
        if not rows:
            return None
        row_id, blob = rows[0]
        return VectorRecord(id=row_id, values=_deserialize(blob))

    def delete(self, record_id: int) -> bool:
        with _translate_errors("delete"):
            conn = self._get_connection()
            conn.execute("DELETE FROM vectors WHERE id = ?", (record_id,))
            deleted = conn.changes() > 0
        return deleted

    def scan_all(self) -> list[VectorRecord]:
        with _translate_errors("scan"):
            rows = list(
                self._get_connection().execute(
                    "SELECT id, embedding FROM vectors ORDER BY id"
                )
            )
        return [VectorRecord(id=row_id, values=_deserialize(blob)) for row_id, blob in rows]

    def count(self) -> int:
        with _translate_errors("count"):
            result = list(self._get_connection().execute("SELECT COUNT(*) FROM vectors"))
        count: int = result[0][0]
        return count

    def close(self) -> None:
        """Close the database connection. Any later call raises PersistenceError."""
        self._closed = True
        if self._conn:
            self._conn.close()
            self._conn = None
            logger.info("Closed SQLiteBackend at %s", self._db_path)
