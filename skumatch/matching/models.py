"""Data models for match results and batch summaries.

MatchResult values are immutable once produced and owned by the caller; the
matcher keeps no reference to them after a batch returns.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from skumatch.domain.models import CatalogProduct
from skumatch.utils.timestamps import utc_now


class MatchStatus(str, Enum):
    """Classification of a query's best match."""

    FOUND = "found"
    PARTIAL_MATCH = "partial_match"
    NOT_FOUND = "not_found"


class BatchState(str, Enum):
    """Lifecycle of one batch run within a session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one query against a catalog snapshot.

    Attributes:
        query: The original input string, echoed verbatim
        status: found, partial_match or not_found
        matched_product: Best-scoring product; None when status is not_found
        score: Best score in (0, 1]; None when nothing scored above zero
        matched_sku: The product or variant SKU that produced the best score
        timestamp: When the result was created (UTC)
    """

    query: str
    status: MatchStatus
    matched_product: Optional[CatalogProduct] = None
    score: Optional[float] = None
    matched_sku: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def is_found(self) -> bool:
        return self.status == MatchStatus.FOUND

    def outcome(self) -> Tuple:
        """Everything except the timestamp, for comparing runs."""
        product_id = self.matched_product.id if self.matched_product else None
        return (self.query, self.status, product_id, self.score, self.matched_sku)


@dataclass(frozen=True)
class BatchSummary:
    """
    Aggregate results of one matching batch.

    Counts are derived from ``results`` on construction.

    Attributes:
        batch_id: Fresh identifier generated per invocation
        results: One MatchResult per query, in input order
        started_at: UTC timestamp when the batch began
        finished_at: UTC timestamp when the batch completed
        processing_time_seconds: Elapsed wall-clock time; derived from the
            timestamps when not given
        total: Number of queries
        found_count: Results with status found
        partial_match_count: Results with status partial_match
        not_found_count: Results with status not_found
    """

    batch_id: str
    results: Tuple[MatchResult, ...]
    started_at: datetime
    finished_at: datetime
    processing_time_seconds: Optional[float] = None
    total: int = field(init=False)
    found_count: int = field(init=False)
    partial_match_count: int = field(init=False)
    not_found_count: int = field(init=False)

    def __post_init__(self):
        """Freeze results and compute counts."""
        results = tuple(self.results)
        statuses = [r.status for r in results]
        object.__setattr__(self, "results", results)
        object.__setattr__(self, "total", len(results))
        object.__setattr__(self, "found_count", statuses.count(MatchStatus.FOUND))
        object.__setattr__(self, "partial_match_count", statuses.count(MatchStatus.PARTIAL_MATCH))
        object.__setattr__(self, "not_found_count", statuses.count(MatchStatus.NOT_FOUND))

        if self.processing_time_seconds is None:
            delta = self.finished_at - self.started_at
            object.__setattr__(self, "processing_time_seconds", delta.total_seconds())

    @property
    def success_rate(self) -> int:
        """Percentage of queries found, rounded; 0 for an empty batch."""
        if self.total == 0:
            return 0
        return round(self.found_count / self.total * 100)
