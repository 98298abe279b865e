"""Scoring rules for matching a query against one candidate SKU.

Rules are evaluated in priority order and the first that applies wins
(comparisons are case-insensitive):

1. query equals the candidate SKU                -> exact_score (1.0)
2. candidate SKU contains the query              -> sku_contains_query_score (0.9)
3. query contains the candidate SKU              -> query_contains_sku_score (0.8)
4. product name contains the query or vice versa -> name_score (0.6)
5. otherwise                                     -> 0.0

A query like "DEMO" against "DEMO-001" scores 0.9 and is classified found.
That is the intended threshold behaviour, not a fuzzy-match bug.
"""

from typing import Optional

from skumatch.config.models import ScoringRules

from .models import MatchStatus

DEFAULT_RULES = ScoringRules()


def score_candidate(
    query: str, sku: str, name: str, rules: Optional[ScoringRules] = None
) -> float:
    """Score a query against one candidate SKU and its product name.

    Blank strings never match: a blank query scores 0.0, a blank SKU skips
    rules 1-3 and a blank name skips rule 4 (the empty string is a substring
    of everything).

    Args:
        query: Query string as submitted
        sku: Candidate SKU (the product's own or a variant's)
        name: Display name of the product owning the SKU
        rules: Score table (defaults to the built-in heuristics)

    Returns:
        Score in [0, 1]
    """
    rules = rules or DEFAULT_RULES

    if not query.strip():
        return 0.0

    query_upper = query.upper()
    sku_upper = (sku or "").upper()
    name_upper = (name or "").upper()

    if sku_upper.strip():
        if sku_upper == query_upper:
            return rules.exact_score
        if query_upper in sku_upper:
            return rules.sku_contains_query_score
        if sku_upper in query_upper:
            return rules.query_contains_sku_score

    if name_upper.strip():
        if query_upper in name_upper or name_upper in query_upper:
            return rules.name_score

    return 0.0


def classify(score: float, rules: Optional[ScoringRules] = None) -> MatchStatus:
    """Map a best score to a match status.

    Args:
        score: Best score across the catalog
        rules: Score table holding the thresholds

    Returns:
        FOUND at or above found_threshold, PARTIAL_MATCH at or above
        partial_threshold, otherwise NOT_FOUND
    """
    rules = rules or DEFAULT_RULES

    if score >= rules.found_threshold:
        return MatchStatus.FOUND
    if score >= rules.partial_threshold:
        return MatchStatus.PARTIAL_MATCH
    return MatchStatus.NOT_FOUND
