import logging
from collections.abc import Iterable
from time import monotonic

from vector_kit.observability import names
from vector_kit.observability.base import MetricsHook, NoOpMetricsHook

from .errors import DimensionMismatchError
from .record_store import VectorRecordStore
from .similarity import cosine_similarity, validate_values
from .types import SearchResult, VectorRecord

logger = logging.getLogger(__name__)


class SimilaritySearchEngine:
    """Exact top-k retrieval by cosine similarity.

    Every query is a linear scan over a snapshot of the store: O(n*d), no
    index and no caching, so the result is always the exact top k.

    Skip policy: a stored record whose dimension differs from the query's
    cannot be scored. It is logged, counted on the metrics hook and left out
    of the ranking; the rest of the query proceeds normally.

    Like the store, the engine is synchronous; run it in `asyncio.to_thread`
    from async code.
    """

    def __init__(
        self,
        store: VectorRecordStore,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._store = store
        self.metrics_hook = metrics_hook

    def search(self, query: Iterable[float], k: int) -> list[VectorRecord]:
        """
        Return up to `k` records most similar to `query`, best first.

        Args:
            query: Query vector. Must be non-empty.
            k: Number of results. `k <= 0` returns an empty list.

        Raises:
            InvalidInputError: If `query` is empty or not a finite real vector.
        """
        return [result.record for result in self.search_with_scores(query, k)]

    def search_with_scores(self, query: Iterable[float], k: int) -> list[SearchResult]:
        """Same ranking as `search`, keeping each record's similarity score."""
        start = monotonic()
        validated = validate_values(query)
        if k <= 0:
            logger.debug("k=%d, returning empty result", k)
            return []

        candidates = self._store.get_all()
        scored: list[SearchResult] = []
        skipped = 0
        for record in candidates:
            try:
                score = cosine_similarity(validated, record.values)
            except DimensionMismatchError:
                logger.warning(
                    "Skipping vector %d: dimension %d does not match query dimension %d",
                    record.id,
                    record.dimension,
                    len(validated),
                )
                skipped += 1
                continue
            scored.append(SearchResult(record=record, score=score))

        # sorted() is stable, equal scores keep enumeration order
        ranked = sorted(scored, key=lambda result: result.score, reverse=True)[:k]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SEARCH_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.SEARCH_REQUESTS_TOTAL)
        self.metrics_hook.record_gauge(names.SEARCH_CANDIDATES, len(candidates))
        if skipped:
            self.metrics_hook.increment(names.SEARCH_SKIPPED_RECORDS_TOTAL, skipped)
        logger.debug(
            "Search over %d vectors returned %d (k=%d, skipped=%d)",
            len(candidates),
            len(ranked),
            k,
            skipped,
        )
        return ranked
