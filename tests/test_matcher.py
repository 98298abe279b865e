"""Unit tests for SkuMatcher.match_one.

Covers:
- Exact, substring and name rules against product and variant SKUs
- Best-candidate selection and first-encountered tie-break
- Result shape for not_found results (no product, no score)
- The single-product headphones scenario
"""

import pytest

from skumatch.config.models import ScoringRules
from skumatch.domain.models import CatalogProduct, CatalogVariant
from skumatch.matching import MatchStatus, SkuMatcher


@pytest.fixture
def headphones_catalog():
    """One product with one variant."""
    return (
        CatalogProduct(
            id="1",
            sku="DEMO-001",
            name="Premium Wireless Headphones",
            variants=(CatalogVariant(id="1", sku="DEMO-001-BLK"),),
        ),
    )


class TestHeadphonesScenario:
    """Query outcomes against a single-product catalog."""

    def test_primary_sku(self, matcher, headphones_catalog):
        result = matcher.match_one("DEMO-001", headphones_catalog)

        assert result.status == MatchStatus.FOUND
        assert result.score == 1.0
        assert result.matched_product == headphones_catalog[0]
        assert result.matched_sku == "DEMO-001"

    def test_variant_sku(self, matcher, headphones_catalog):
        result = matcher.match_one("DEMO-001-BLK", headphones_catalog)

        assert result.status == MatchStatus.FOUND
        assert result.score == 1.0
        assert result.matched_product == headphones_catalog[0]
        assert result.matched_sku == "DEMO-001-BLK"

    def test_short_prefix_is_found(self, matcher, headphones_catalog):
        """A prefix of the SKU scores 0.9, which the threshold classifies as found."""
        result = matcher.match_one("DEMO", headphones_catalog)

        assert result.status == MatchStatus.FOUND
        assert result.score == 0.9

    def test_name_word_is_partial(self, matcher, headphones_catalog):
        result = matcher.match_one("Wireless", headphones_catalog)

        assert result.status == MatchStatus.PARTIAL_MATCH
        assert result.score == 0.6
        assert result.matched_product == headphones_catalog[0]

    def test_unrelated_query_not_found(self, matcher, headphones_catalog):
        result = matcher.match_one("XYZ-999", headphones_catalog)

        assert result.status == MatchStatus.NOT_FOUND
        assert result.score is None
        assert result.matched_product is None
        assert result.matched_sku is None


class TestMatchOne:
    """General match_one behaviour."""

    def test_query_echoed_verbatim(self, matcher, demo_catalog):
        result = matcher.match_one("  demo-003 ", demo_catalog)
        assert result.query == "  demo-003 "

    @pytest.mark.parametrize("product_index", range(5))
    def test_primary_sku_always_found(self, matcher, demo_catalog, product_index):
        product = demo_catalog[product_index]

        result = matcher.match_one(product.sku.lower(), demo_catalog)

        assert result.status == MatchStatus.FOUND
        assert result.score == 1.0
        assert result.matched_product == product

    def test_empty_catalog(self, matcher):
        result = matcher.match_one("DEMO-001", ())

        assert result.status == MatchStatus.NOT_FOUND
        assert result.score is None
        assert result.matched_product is None

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_not_found(self, matcher, demo_catalog, query):
        result = matcher.match_one(query, demo_catalog)

        assert result.status == MatchStatus.NOT_FOUND
        assert result.score is None

    def test_best_product_wins_over_earlier_weaker(self, matcher):
        """A later exact SKU match beats an earlier name match."""
        catalog = (
            CatalogProduct(id="a", sku="AAA-1", name="Blue"),
            CatalogProduct(id="b", sku="BLUE"),
        )

        result = matcher.match_one("blue", catalog)

        assert result.matched_product.id == "b"
        assert result.score == 1.0

    def test_variant_exact_beats_own_sku_substring(self, matcher, small_catalog):
        result = matcher.match_one("ABC-100-L", small_catalog)

        assert result.matched_product.id == "10"
        assert result.matched_sku == "ABC-100-L"
        assert result.score == 1.0

    def test_tie_goes_to_first_product(self, matcher, small_catalog):
        """'ABC' is a substring of both primary SKUs; the first product wins."""
        result = matcher.match_one("ABC", small_catalog)

        assert result.matched_product.id == "10"
        assert result.matched_sku == "ABC-100"
        assert result.score == 0.9

    def test_own_sku_checked_before_variants(self, matcher, small_catalog):
        """'ABC-2' is contained in the own SKU and a variant; the own SKU wins."""
        result = matcher.match_one("ABC-2", small_catalog)

        assert result.matched_sku == "ABC-200"

    def test_variant_exact_beats_other_products(self, matcher, small_catalog):
        result = matcher.match_one("xyz-9", small_catalog)

        assert result.status == MatchStatus.FOUND
        assert result.matched_product.id == "20"
        assert result.matched_sku == "XYZ-9"

    def test_query_containing_sku(self, matcher, small_catalog):
        result = matcher.match_one("PREFIX-ABC-100-L-SUFFIX", small_catalog)

        assert result.status == MatchStatus.PARTIAL_MATCH
        assert result.score == 0.8
        assert result.matched_sku == "ABC-100"

    def test_name_match_on_second_product(self, matcher, small_catalog):
        result = matcher.match_one("blue", small_catalog)

        assert result.status == MatchStatus.PARTIAL_MATCH
        assert result.matched_product.id == "20"

    def test_score_kept_when_below_partial_threshold(self, small_catalog):
        """A positive score under the partial threshold is reported without a product."""
        rules = ScoringRules(name_score=0.5, partial_threshold=0.6)
        matcher = SkuMatcher(rules=rules)

        result = matcher.match_one("blue", small_catalog)

        assert result.status == MatchStatus.NOT_FOUND
        assert result.score == 0.5
        assert result.matched_product is None

    def test_result_is_immutable(self, matcher, demo_catalog):
        result = matcher.match_one("DEMO-001", demo_catalog)
        with pytest.raises(AttributeError):
            result.status = MatchStatus.NOT_FOUND

    def test_timestamp_is_utc(self, matcher, demo_catalog):
        result = matcher.match_one("DEMO-001", demo_catalog)
        assert result.timestamp.utcoffset().total_seconds() == 0

    def test_outcome_excludes_timestamp(self, matcher, demo_catalog):
        first = matcher.match_one("DEMO-002", demo_catalog)
        second = matcher.match_one("DEMO-002", demo_catalog)
        assert first.outcome() == second.outcome()
