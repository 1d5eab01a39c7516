# src/vector_kit/api/app.py

"""HTTP surface of the vector store.

Validation is loose at this layer: a malformed body is answered with HTTP 200
and a plain-text message, never a structured error. Persistence
failures are not caught here and surface as HTTP 500.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from vector_kit.vectorstores.errors import (
    DimensionMismatchError,
    InvalidInputError,
    NotFoundError,
)
from vector_kit.vectorstores.record_store import VectorRecordStore
from vector_kit.vectorstores.search import SimilaritySearchEngine
from vector_kit.vectorstores.similarity import cosine_similarity, validate_values

from .schemas import VECTOR_ADAPTER, VECTOR_BATCH_ADAPTER, SearchRequest, VectorOut

logger = logging.getLogger(__name__)

INVALID_VECTOR = "Invalid vector data."
INVALID_BATCH = "Invalid batch vector data."
INVALID_SEARCH = "Invalid search data."
INVALID_PAIR = "Please provide exactly two vectors."


def _text(message: str) -> PlainTextResponse:
    return PlainTextResponse(message)


def create_app(
    store: VectorRecordStore,
    search_engine: SimilaritySearchEngine | None = None,
) -> FastAPI:
    """Create the FastAPI application around a single shared store.

    The app owns `store` and closes it on shutdown.

    Args:
        store: Process-wide record store.
        search_engine: Engine reading from `store`. Built on demand if omitted.

    Example:
        >>> store = VectorRecordStore(InMemoryBackend())
        >>> app = create_app(store)
        >>> uvicorn.run(app)
    """
    engine = search_engine or SimilaritySearchEngine(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await asyncio.to_thread(app.state.store.close)
        logger.info("Vector store closed")

    app = FastAPI(title="vector-kit", lifespan=lifespan)
    app.state.store = store
    app.state.search_engine = engine

    @app.post("/insert", response_class=PlainTextResponse)
    async def insert(request: Request) -> PlainTextResponse:
        try:
            values = VECTOR_ADAPTER.validate_json(await request.body())
            await asyncio.to_thread(store.insert, values)
        except (ValidationError, InvalidInputError) as exc:
            logger.debug("Rejected insert: %s", exc)
            return _text(INVALID_VECTOR)
        return _text("Vector inserted successfully.")

    @app.post("/insert-batch", response_class=PlainTextResponse)
    async def insert_batch(request: Request) -> PlainTextResponse:
        try:
            batch = VECTOR_BATCH_ADAPTER.validate_json(await request.body())
        except ValidationError as exc:
            logger.debug("Rejected batch insert: %s", exc)
            return _text(INVALID_BATCH)

        result = await asyncio.to_thread(store.insert_batch, batch)
        if result.ok:
            return _text("Batch vectors inserted successfully.")
        return _text(
            f"Batch vectors inserted: {len(result.inserted_ids)} stored, "
            f"{len(result.failures)} rejected."
        )

    @app.post("/search", response_model=None)
    async def search(request: Request) -> list[VectorOut] | PlainTextResponse:
        try:
            search_request = SearchRequest.model_validate_json(await request.body())
            records = await asyncio.to_thread(
                engine.search, search_request.query_vector, search_request.top_k
            )
        except (ValidationError, InvalidInputError) as exc:
            logger.debug("Rejected search: %s", exc)
            return _text(INVALID_SEARCH)
        return [VectorOut.from_record(record) for record in records]

    @app.put("/update/{record_id}", response_class=PlainTextResponse)
    async def update(record_id: int, request: Request) -> PlainTextResponse:
        try:
            values = VECTOR_ADAPTER.validate_json(await request.body())
            await asyncio.to_thread(store.update, record_id, values)
        except (ValidationError, InvalidInputError) as exc:
            logger.debug("Rejected update of %d: %s", record_id, exc)
            return _text(INVALID_VECTOR)
        except NotFoundError:
            return _text("Vector not found.")
        return _text("Vector updated successfully.")

    @app.delete("/delete/{record_id}", response_class=PlainTextResponse)
    async def delete(record_id: int) -> PlainTextResponse:
        deleted = await asyncio.to_thread(store.delete, record_id)
        if not deleted:
            return _text("No vector deleted.")
        return _text("Vector deleted successfully.")

    @app.post("/cosine-similarity", response_class=PlainTextResponse)
    async def similarity(request: Request) -> PlainTextResponse:
        try:
            vectors = VECTOR_BATCH_ADAPTER.validate_json(await request.body())
        except ValidationError:
            return _text(INVALID_PAIR)
        if len(vectors) != 2:
            return _text(INVALID_PAIR)

        try:
            a, b = (validate_values(vector) for vector in vectors)
            value = cosine_similarity(a, b)
        except InvalidInputError:
            return _text(INVALID_VECTOR)
        except DimensionMismatchError:
            return _text("Vectors must have the same dimension.")
        return _text(f"Cosine Similarity: {value}")

    @app.get("/vectors")
    async def list_vectors() -> list[VectorOut]:
        records = await asyncio.to_thread(store.get_all)
        return [VectorOut.from_record(record) for record in records]

    logger.info("Created vector-kit app")
    return app
