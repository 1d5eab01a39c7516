from dataclasses import dataclass, field


@dataclass(frozen=True)
class VectorRecord:
    id: int
    values: tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class SearchResult:
    record: VectorRecord
    score: float

    @property
    def id(self) -> int:
        return self.record.id


@dataclass(frozen=True)
class BatchInsertResult:
    """Outcome of a best-effort batch insert.

    `inserted_ids` follows input order for the elements that succeeded;
    `failures` maps the input index of each rejected element to its error.
    """

    inserted_ids: list[int] = field(default_factory=list)
    failures: dict[int, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures
