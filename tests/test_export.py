"""Unit tests for result export and batch summaries."""

import csv
import json
from datetime import datetime, timedelta, timezone

import pytest

from skumatch.catalog import DEMO_CATALOG
from skumatch.config.models import ExportField
from skumatch.matching import (
    BatchSummary,
    MatchResult,
    MatchStatus,
    build_export_row,
    build_summary_dict,
    default_export_filename,
    filter_results,
    format_summary_text,
    write_export,
)

STARTED = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def results():
    headphones, watch = DEMO_CATALOG[0], DEMO_CATALOG[1]
    return (
        MatchResult(
            query="DEMO-001",
            status=MatchStatus.FOUND,
            matched_product=headphones,
            score=1.0,
            matched_sku="DEMO-001",
            timestamp=STARTED,
        ),
        MatchResult(
            query="Watch",
            status=MatchStatus.PARTIAL_MATCH,
            matched_product=watch,
            score=0.6,
            matched_sku="DEMO-002",
            timestamp=STARTED,
        ),
        MatchResult(query="XYZ-999", status=MatchStatus.NOT_FOUND, timestamp=STARTED),
    )


@pytest.fixture
def summary(results):
    return BatchSummary(
        batch_id="b1",
        results=results,
        started_at=STARTED,
        finished_at=STARTED + timedelta(seconds=2),
    )


class TestBatchSummary:
    """Derived fields on BatchSummary."""

    def test_counts(self, summary):
        assert summary.total == 3
        assert summary.found_count == 1
        assert summary.partial_match_count == 1
        assert summary.not_found_count == 1

    def test_processing_time_from_timestamps(self, summary):
        assert summary.processing_time_seconds == 2.0

    def test_explicit_zero_processing_time_kept(self, results):
        summary = BatchSummary(
            batch_id="b2",
            results=results,
            started_at=STARTED,
            finished_at=STARTED + timedelta(seconds=5),
            processing_time_seconds=0.0,
        )

        assert summary.processing_time_seconds == 0.0

    def test_success_rate_rounds(self, summary):
        assert summary.success_rate == 33


class TestFilterResults:
    def test_all(self, results):
        assert filter_results(results, "all") == list(results)

    @pytest.mark.parametrize("status", ["found", "partial_match", "not_found"])
    def test_by_status(self, results, status):
        filtered = filter_results(results, status)
        assert [r.status.value for r in filtered] == [status]

    def test_unknown_filter(self, results):
        with pytest.raises(ValueError, match="Unknown status filter"):
            filter_results(results, "maybe")


class TestBuildExportRow:
    def test_default_fields(self, results):
        row = build_export_row(results[0])

        assert row == {
            "SKU": "DEMO-001",
            "Search Status": "Found",
            "Product Name": "Premium Wireless Headphones",
            "Match Score": "100%",
        }

    def test_partial_match(self, results):
        row = build_export_row(results[1], ["status", "match_score", "product_sku"])

        assert row == {"Search Status": "Partial Match", "Match Score": "60%", "Product SKU": "DEMO-002"}

    def test_not_found_has_empty_product_fields(self, results):
        row = build_export_row(results[2], list(ExportField))

        assert row["Search Status"] == "Not Found"
        assert row["Match Score"] == ""
        assert row["Product Name"] == ""
        assert row["Description"] == ""
        assert row["Variants"] == ""
        assert row["Search Time"] == "2025-11-04T12:00:00.000000Z"

    def test_column_order_follows_fields(self, results):
        row = build_export_row(results[0], [ExportField.VARIANTS, ExportField.SKU])
        assert list(row) == ["Variants", "SKU"]
        assert row["Variants"] == "1"


class TestSummaryFormatting:
    def test_summary_dict(self, summary):
        data = build_summary_dict(summary)

        assert data["batch_id"] == "b1"
        assert data["found"] == 1
        assert data["success_rate"] == 33
        assert data["started_at"] == "2025-11-04T12:00:00Z"

    def test_summary_text(self, summary):
        text = format_summary_text(summary)

        assert "Total searched:  3" in text
        assert "Success rate:    33%" in text
        assert "DEMO-001: Found -> DEMO-001 (Premium Wireless Headphones)" in text
        assert "XYZ-999: Not Found" in text


class TestWriteExport:
    def test_json(self, summary, tmp_path):
        path = tmp_path / "out.json"

        count = write_export(summary, path, fmt="json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert count == 3
        assert data["export_info"]["format"] == "json"
        assert data["export_info"]["filter"] == "all"
        assert data["export_info"]["total_results"] == 3
        assert data["export_info"]["summary"]["total"] == 3
        assert data["results"][0]["SKU"] == "DEMO-001"

    def test_csv_with_filter(self, summary, tmp_path):
        path = tmp_path / "out.csv"

        count = write_export(
            summary, path, fmt="csv", fields=["sku", "status"], status_filter="not_found"
        )

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert count == 1
        assert rows == [["SKU", "Search Status"], ["XYZ-999", "Not Found"]]

    def test_directory_gets_default_name(self, summary, tmp_path):
        write_export(summary, tmp_path, fmt="csv")

        written = list(tmp_path.glob("sku-search-results-*.csv"))
        assert len(written) == 1

    def test_creates_parent_directories(self, summary, tmp_path):
        path = tmp_path / "exports" / "2025" / "out.json"
        write_export(summary, path)
        assert path.exists()

    def test_unknown_format(self, summary, tmp_path):
        with pytest.raises(ValueError):
            write_export(summary, tmp_path / "out.xlsx", fmt="excel")


def test_default_export_filename():
    assert default_export_filename("csv", STARTED) == "sku-search-results-2025-11-04.csv"
    assert default_export_filename("json", STARTED) == "sku-search-results-2025-11-04.json"
