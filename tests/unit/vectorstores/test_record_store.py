import threading
from collections.abc import Sequence
from unittest.mock import patch

import pytest

from vector_kit.observability import InMemoryMetricsHook, names
from vector_kit.vectorstores import (
    BatchInsertError,
    InMemoryBackend,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    VectorRecord,
    VectorRecordStore,
)


@pytest.fixture
def store() -> VectorRecordStore:
    return VectorRecordStore(InMemoryBackend())


# --- Insert ---


def test_insert_returns_distinct_ids(store: VectorRecordStore) -> None:
    ids = [store.insert([float(i), 1.0]) for i in range(20)]
    assert len(set(ids)) == 20
    assert all(record_id >= 0 for record_id in ids)


def test_ids_never_reused_after_delete(store: VectorRecordStore) -> None:
    first = [store.insert([1.0]) for _ in range(3)]
    store.delete(first[-1])
    store.delete(first[0])
    second = [store.insert([2.0]) for _ in range(3)]

    assert not set(first) & set(second)
    assert len(set(second)) == 3


def test_insert_round_trip_is_exact(store: VectorRecordStore) -> None:
    values = [0.1, 1 / 3, -2.5e-300, 12345.678, 0.0]
    record_id = store.insert(values)

    record = store.get(record_id)
    assert record == VectorRecord(id=record_id, values=tuple(values))


def test_insert_empty_raises(store: VectorRecordStore) -> None:
    with pytest.raises(InvalidInputError):
        store.insert([])
    assert store.count() == 0


def test_insert_does_not_enforce_dimension(store: VectorRecordStore) -> None:
    store.insert([1.0, 0.0])
    store.insert([1.0, 0.0, 0.0])
    assert [r.dimension for r in store.get_all()] == [2, 3]


def test_caller_cannot_mutate_stored_values(store: VectorRecordStore) -> None:
    values = [1.0, 2.0]
    record_id = store.insert(values)
    values[0] = 99.0

    record = store.get(record_id)
    assert record.values == (1.0, 2.0)
    with pytest.raises(AttributeError):
        record.values = (0.0, 0.0)  # type: ignore[misc]


# --- Batch insert ---


def test_insert_batch_is_best_effort(store: VectorRecordStore) -> None:
    result = store.insert_batch([[1.0, 0.0], [], [0.0, 1.0], ["x"], [10**400]])

    assert not result.ok
    assert len(result.inserted_ids) == 2
    assert set(result.failures) == {1, 3, 4}
    assert all(isinstance(e, InvalidInputError) for e in result.failures.values())
    assert [r.values for r in store.get_all()] == [(1.0, 0.0), (0.0, 1.0)]


def test_insert_batch_persistence_failure_carries_partial_result() -> None:
    backend = InMemoryBackend()
    store = VectorRecordStore(backend)
    real_add = backend.add
    calls = {"n": 0}

    def flaky_add(values: Sequence[float]) -> int:
        calls["n"] += 1
        if calls["n"] == 2:
            raise PersistenceError("disk full")
        return real_add(values)

    with patch.object(backend, "add", side_effect=flaky_add):
        with pytest.raises(BatchInsertError, match="stopped at element 2") as exc_info:
            store.insert_batch([[1.0], [], [2.0], [3.0]])

    result = exc_info.value.result
    assert isinstance(exc_info.value, PersistenceError)
    assert result.inserted_ids == [1]
    assert set(result.failures) == {1, 2}
    assert isinstance(result.failures[2], PersistenceError)
    assert [r.id for r in store.get_all()] == [1]


def test_insert_batch_all_valid(store: VectorRecordStore) -> None:
    result = store.insert_batch([[1.0], [2.0], [3.0]])
    assert result.ok
    assert result.inserted_ids == [r.id for r in store.get_all()]


# --- Update ---


def test_update_replaces_values(store: VectorRecordStore) -> None:
    record_id = store.insert([1.0, 0.0])

    assert store.update(record_id, [0.0, 1.0, 5.0]) is True
    assert store.get(record_id).values == (0.0, 1.0, 5.0)
    assert store.count() == 1


def test_update_missing_raises_not_found(store: VectorRecordStore) -> None:
    with pytest.raises(NotFoundError, match="Vector 42 not found") as exc_info:
        store.update(42, [1.0])
    assert exc_info.value.record_id == 42


def test_update_empty_raises(store: VectorRecordStore) -> None:
    record_id = store.insert([1.0])
    with pytest.raises(InvalidInputError):
        store.update(record_id, [])
    assert store.get(record_id).values == (1.0,)


# --- Delete / get ---


def test_delete_reports_nothing_deleted_second_time(store: VectorRecordStore) -> None:
    record_id = store.insert([1.0])

    assert store.delete(record_id) is True
    assert store.delete(record_id) is False
    assert store.get_all() == []


def test_get_missing_raises(store: VectorRecordStore) -> None:
    with pytest.raises(NotFoundError):
        store.get(7)


def test_get_all_is_in_id_order(store: VectorRecordStore) -> None:
    ids = [store.insert([float(i)]) for i in range(5)]
    store.delete(ids[2])
    assert [r.id for r in store.get_all()] == [ids[0], ids[1], ids[3], ids[4]]


def test_close_closes_backend() -> None:
    backend = InMemoryBackend()
    store = VectorRecordStore(backend)
    store.insert([1.0])
    store.close()
    assert backend.count() == 0


# --- Metrics ---


def test_mutations_are_recorded_on_metrics_hook() -> None:
    hook = InMemoryMetricsHook()
    store = VectorRecordStore(InMemoryBackend(), metrics_hook=hook)

    record_id = store.insert([1.0])
    store.insert([2.0])
    store.update(record_id, [3.0])
    store.delete(record_id)
    with pytest.raises(NotFoundError):
        store.update(record_id, [1.0])

    assert hook.counter(names.STORE_OPERATIONS_TOTAL, {"operation": "insert"}) == 2
    assert hook.counter(names.STORE_OPERATIONS_TOTAL, {"operation": "update"}) == 1
    assert hook.counter(names.STORE_OPERATIONS_TOTAL, {"operation": "delete"}) == 1
    assert hook.counter(names.STORE_ERRORS_TOTAL, {"operation": "update"}) == 1
    assert hook.gauge(names.STORE_RECORDS) == 1
    assert len(hook.latencies[names.STORE_INSERT_DURATION]) == 2


# --- Concurrency ---


def test_concurrent_inserts_and_reads_stay_consistent(store: VectorRecordStore) -> None:
    writers, per_writer = 4, 50
    errors: list[str] = []
    done = threading.Event()

    def write() -> None:
        for i in range(per_writer):
            store.insert([float(i), 1.0])

    def read() -> None:
        while not done.is_set():
            ids = [r.id for r in store.get_all()]
            if ids != sorted(set(ids)):
                errors.append(f"inconsistent snapshot: {ids}")

    readers = [threading.Thread(target=read) for _ in range(3)]
    threads = [threading.Thread(target=write) for _ in range(writers)]
    for t in readers + threads:
        t.start()
    for t in threads:
        t.join()
    done.set()
    for t in readers:
        t.join()

    assert errors == []
    records = store.get_all()
    assert len(records) == writers * per_writer
    assert len({r.id for r in records}) == writers * per_writer
