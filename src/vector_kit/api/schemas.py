from pydantic import BaseModel, ConfigDict, StrictFloat, TypeAdapter

from vector_kit.vectorstores.types import VectorRecord

# Strict floats still accept JSON integers but reject strings and booleans
Vector = list[StrictFloat]

VECTOR_ADAPTER: TypeAdapter[list[float]] = TypeAdapter(Vector)
VECTOR_BATCH_ADAPTER: TypeAdapter[list[list[float]]] = TypeAdapter(list[Vector])


class SearchRequest(BaseModel):
    query_vector: Vector
    top_k: int

    model_config = ConfigDict(extra="ignore")


class VectorOut(BaseModel):
    id: int
    vector: list[float]

    @classmethod
    def from_record(cls, record: VectorRecord) -> "VectorOut":
        return cls(id=record.id, vector=list(record.values))
