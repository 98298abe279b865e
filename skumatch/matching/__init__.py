"""SKU matching engine for classifying queries against a product catalog.

This module provides:
- SkuMatcher: Scores queries and runs chunked batches with progress
- MatchSession: Tracks one batch at a time and its terminal state
- MatchResult / BatchSummary: Immutable results and batch aggregates
- Export helpers for writing results as JSON or CSV
"""

from .engine import SkuMatcher
from .exceptions import BatchCancelledError, BatchInProgressError, InvalidInputError, MatcherError
from .export import (
    build_export_row,
    build_summary_dict,
    default_export_filename,
    filter_results,
    format_summary_text,
    write_export,
)
from .models import BatchState, BatchSummary, MatchResult, MatchStatus
from .scoring import classify, score_candidate
from .session import MatchSession

__all__ = [
    "SkuMatcher",
    "MatchSession",
    "MatchResult",
    "MatchStatus",
    "BatchState",
    "BatchSummary",
    "MatcherError",
    "InvalidInputError",
    "BatchCancelledError",
    "BatchInProgressError",
    "score_candidate",
    "classify",
    "build_export_row",
    "build_summary_dict",
    "default_export_filename",
    "filter_results",
    "format_summary_text",
    "write_export",
]
