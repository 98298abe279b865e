"""SKU matching engine.

This module implements the matching logic that:
1. Scores a query against every product SKU and variant SKU in a snapshot
2. Keeps the single best product (first encountered wins ties)
3. Classifies the best score as found / partial_match / not_found
4. Runs batches in fixed-size chunks, yielding to the event loop after every
   query so progress callbacks and other tasks can run in between
"""

import asyncio
import inspect
import logging
import time
from collections.abc import Iterable as IterableABC
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Union
from uuid import uuid4

from skumatch.catalog.exceptions import CatalogUnavailableError
from skumatch.catalog.provider import CatalogProvider, load_snapshot
from skumatch.config.models import ScoringRules
from skumatch.domain.models import CatalogProduct
from skumatch.logging import get_logger
from skumatch.logging.context import log_context
from skumatch.utils.timestamps import elapsed_seconds, utc_now

from .exceptions import BatchCancelledError, InvalidInputError
from .models import BatchSummary, MatchResult, MatchStatus
from .scoring import classify, score_candidate

logger = get_logger(__name__, component="matcher")

ProgressCallback = Callable[[float], Union[None, Awaitable[None]]]
CatalogSource = Union[CatalogProvider, Sequence[CatalogProduct]]

DEFAULT_CHUNK_SIZE = 5


class SkuMatcher:
    """Classifies query strings against a catalog snapshot.

    The matcher is stateless across calls: the catalog is passed on every
    call and nothing from one batch survives into the next, so concurrent
    batches never share mutable state.
    """

    def __init__(
        self,
        rules: Optional[ScoringRules] = None,
        logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        """Initialize SkuMatcher.

        Args:
            rules: Score table (defaults to the built-in heuristics)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.rules = rules or ScoringRules()
        self.logger = logger_instance or logger

    def match_one(self, query: str, catalog: Iterable[CatalogProduct]) -> MatchResult:
        """Match a single query against a catalog snapshot.

        Every product is scored on its own SKU and then each variant SKU; the
        product keeps the maximum. Only a strictly higher score replaces the
        current best, so ties go to the first product (and first SKU within
        it) in catalog order.

        Never raises for a string query. An empty catalog or a blank query
        yields not_found with no score.

        Args:
            query: Query string, echoed verbatim in the result
            catalog: Products in catalog order

        Returns:
            MatchResult for the query
        """
        best_product: Optional[CatalogProduct] = None
        best_sku: Optional[str] = None
        best_score = 0.0

        for product in catalog:
            for sku, _variant in product.all_skus():
                score = score_candidate(query, sku, product.name, self.rules)
                if score > best_score:
                    best_product = product
                    best_sku = sku
                    best_score = score

        status = classify(best_score, self.rules)
        matched = status != MatchStatus.NOT_FOUND

        return MatchResult(
            query=query,
            status=status,
            matched_product=best_product if matched else None,
            score=best_score if best_score > 0 else None,
            matched_sku=best_sku if matched else None,
        )

    async def match_batch(
        self,
        queries: Iterable[str],
        catalog: CatalogSource,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> BatchSummary:
        """Match a batch of queries in chunks with progress reporting.

        Algorithm:
        1. Validate arguments (InvalidInputError before any work)
        2. Load the catalog snapshot once (CatalogUnavailableError on failure)
        3. For each chunk, in order: stop if cancel_event is set, then match
           each query in order, report progress and yield to the event loop
        4. Build the BatchSummary with counts, timings and a fresh batch_id

        Progress is reported after every query as ``done / total * 100``, so
        the last call is exactly 100.0. An empty batch reports 100.0 once.
        Any failure aborts the whole batch; no partial results are returned.

        Args:
            queries: Query strings in order; duplicates are matched independently
            catalog: CatalogProvider or sequence of CatalogProduct
            chunk_size: Queries per chunk, at least 1
            on_progress: Callback taking a percentage; may return an awaitable
            cancel_event: Checked at every chunk boundary

        Returns:
            BatchSummary with results in input order

        Raises:
            InvalidInputError: Malformed queries, chunk_size or catalog
            CatalogUnavailableError: Catalog snapshot could not be obtained
            BatchCancelledError: cancel_event was set at a chunk boundary
        """
        query_list = _validate_queries(queries)
        _validate_chunk_size(chunk_size)
        _validate_catalog(catalog)

        batch_id = uuid4().hex
        started_at = utc_now()
        started = time.perf_counter()
        total = len(query_list)

        with log_context(batch_id=batch_id):
            self.logger.info(
                "Batch started",
                extra={
                    "event": "batch.started",
                    "query_count": total,
                    "chunk_size": chunk_size,
                },
            )

            try:
                snapshot = await load_snapshot(catalog)
            except CatalogUnavailableError as e:
                self.logger.error(
                    f"Batch failed: {e}",
                    extra={
                        "event": "batch.failed",
                        "reason": "catalog_unavailable",
                        "catalog_source": e.source,
                    },
                )
                raise

            results: List[MatchResult] = []
            try:
                for chunk_index, start in enumerate(range(0, total, chunk_size)):
                    if cancel_event is not None and cancel_event.is_set():
                        self.logger.warning(
                            "Batch cancelled",
                            extra={
                                "event": "batch.cancelled",
                                "processed": len(results),
                                "query_count": total,
                            },
                        )
                        raise BatchCancelledError(
                            f"Batch {batch_id} cancelled after {len(results)} of {total} queries",
                            batch_id=batch_id,
                            processed=len(results),
                        )

                    for query in query_list[start:start + chunk_size]:
                        results.append(self.match_one(query, snapshot))
                        await _report_progress(on_progress, len(results) / total * 100)
                        # Suspension point: progress observers run here
                        await asyncio.sleep(0)

                    self.logger.debug(
                        "Chunk completed",
                        extra={
                            "event": "batch.chunk.completed",
                            "chunk_index": chunk_index,
                            "processed": len(results),
                            "query_count": total,
                        },
                    )

                if total == 0:
                    await _report_progress(on_progress, 100.0)
            except BatchCancelledError:
                raise
            except asyncio.CancelledError:
                self.logger.warning(
                    "Batch task cancelled",
                    extra={"event": "batch.cancelled", "processed": len(results)},
                )
                raise
            except Exception as e:
                self.logger.error(
                    f"Batch failed: {e}",
                    extra={
                        "event": "batch.failed",
                        "reason": type(e).__name__,
                        "processed": len(results),
                    },
                )
                raise

            summary = BatchSummary(
                batch_id=batch_id,
                results=tuple(results),
                started_at=started_at,
                finished_at=utc_now(),
                processing_time_seconds=elapsed_seconds(started),
            )

            self.logger.info(
                "Batch completed",
                extra={
                    "event": "batch.completed",
                    "total": summary.total,
                    "found": summary.found_count,
                    "partial_match": summary.partial_match_count,
                    "not_found": summary.not_found_count,
                    "duration_ms": int(summary.processing_time_seconds * 1000),
                    "catalog_size": len(snapshot),
                },
            )
            return summary


async def _report_progress(on_progress: Optional[ProgressCallback], percent: float) -> None:
    if on_progress is None:
        return
    outcome = on_progress(percent)
    if inspect.isawaitable(outcome):
        await outcome


def _validate_queries(queries: Iterable[str]) -> List[str]:
    """Materialize queries, rejecting anything but an iterable of strings."""
    if queries is None or isinstance(queries, (str, bytes)):
        raise InvalidInputError(
            "queries must be a sequence of strings, got "
            f"{'None' if queries is None else type(queries).__name__}"
        )

    try:
        query_list = list(queries)
    except TypeError as e:
        raise InvalidInputError(f"queries must be iterable: {e}") from e

    for index, query in enumerate(query_list):
        if not isinstance(query, str):
            raise InvalidInputError(
                f"Query #{index} must be a string, got {type(query).__name__}"
            )
    return query_list


def _validate_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise InvalidInputError(f"chunk_size must be an integer, got {chunk_size!r}")
    if chunk_size < 1:
        raise InvalidInputError(f"chunk_size must be at least 1, got {chunk_size}")


def _validate_catalog(catalog: CatalogSource) -> None:
    """Reject catalogs that are neither a provider nor an iterable of products.

    None is left for load_snapshot, which reports it as an unavailable catalog.
    """
    if catalog is None or isinstance(catalog, CatalogProvider):
        return
    if isinstance(catalog, (str, bytes)) or not isinstance(catalog, IterableABC):
        raise InvalidInputError(
            f"catalog must be a CatalogProvider or a sequence of products, got {type(catalog).__name__}"
        )
