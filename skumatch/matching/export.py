"""Helpers for exporting match results and summarizing batches.

Rows are keyed by column label (``SKU``, ``Search Status``, ...) so the same
row dicts feed both the JSON and the CSV writers.
"""

import csv
import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from skumatch.config.models import DEFAULT_EXPORT_FIELDS, STATUS_FILTERS, ExportField, ExportFormat
from skumatch.logging import get_logger
from skumatch.utils.timestamps import export_date_stamp, format_timestamp, utc_now

from .models import BatchSummary, MatchResult, MatchStatus

logger = get_logger(__name__, component="export")

FIELD_LABELS: Dict[ExportField, str] = {
    ExportField.SKU: "SKU",
    ExportField.STATUS: "Search Status",
    ExportField.SEARCH_QUERY: "Search Query",
    ExportField.TIMESTAMP: "Search Time",
    ExportField.MATCH_SCORE: "Match Score",
    ExportField.PRODUCT_NAME: "Product Name",
    ExportField.PRODUCT_SKU: "Product SKU",
    ExportField.DESCRIPTION: "Description",
    ExportField.VARIANTS: "Variants",
}

STATUS_LABELS: Dict[MatchStatus, str] = {
    MatchStatus.FOUND: "Found",
    MatchStatus.PARTIAL_MATCH: "Partial Match",
    MatchStatus.NOT_FOUND: "Not Found",
}

FieldSpec = Union[ExportField, str]


def default_export_filename(fmt: Union[ExportFormat, str], when=None) -> str:
    """Build ``sku-search-results-YYYY-MM-DD.<ext>``."""
    return f"sku-search-results-{export_date_stamp(when)}.{ExportFormat(fmt).value}"


def filter_results(
    results: Iterable[MatchResult], status_filter: str = "all"
) -> List[MatchResult]:
    """Keep results whose status matches the filter.

    Args:
        results: Results in input order
        status_filter: ``all`` or a MatchStatus value

    Returns:
        Matching results, order preserved

    Raises:
        ValueError: Unknown filter
    """
    if status_filter not in STATUS_FILTERS:
        raise ValueError(
            f"Unknown status filter {status_filter!r}; expected one of {', '.join(STATUS_FILTERS)}"
        )
    if status_filter == "all":
        return list(results)
    wanted = MatchStatus(status_filter)
    return [r for r in results if r.status == wanted]


def build_export_row(
    result: MatchResult, fields: Optional[Sequence[FieldSpec]] = None
) -> Dict[str, str]:
    """Render one result as a label -> value row.

    Product columns are empty for unmatched results. The score renders as a
    rounded percentage (``"90%"``), or empty when nothing scored.

    Args:
        result: Result to render
        fields: Columns in output order (defaults to sku, status, name, score)

    Returns:
        Ordered dict of column label to string value
    """
    product = result.matched_product
    row: Dict[str, str] = {}

    for column in fields or DEFAULT_EXPORT_FIELDS:
        export_field = ExportField(column)
        label = FIELD_LABELS[export_field]

        if export_field == ExportField.SKU:
            value = result.query
        elif export_field == ExportField.STATUS:
            value = STATUS_LABELS[result.status]
        elif export_field == ExportField.SEARCH_QUERY:
            value = result.query
        elif export_field == ExportField.TIMESTAMP:
            value = format_timestamp(result.timestamp, include_microseconds=True)
        elif export_field == ExportField.MATCH_SCORE:
            value = f"{round(result.score * 100)}%" if result.score else ""
        elif export_field == ExportField.PRODUCT_NAME:
            value = product.name if product else ""
        elif export_field == ExportField.PRODUCT_SKU:
            value = product.sku if product else ""
        elif export_field == ExportField.DESCRIPTION:
            value = (product.description or "") if product else ""
        else:
            value = str(len(product.variants)) if product and product.variants else ""

        row[label] = value

    return row


def build_summary_dict(summary: BatchSummary) -> Dict:
    """Build a lightweight dict of batch counts and timings.

    Useful for logs and the JSON export header.
    """
    return {
        "batch_id": summary.batch_id,
        "total": summary.total,
        "found": summary.found_count,
        "partial_match": summary.partial_match_count,
        "not_found": summary.not_found_count,
        "success_rate": summary.success_rate,
        "processing_time_seconds": round(summary.processing_time_seconds, 3),
        "started_at": format_timestamp(summary.started_at),
        "finished_at": format_timestamp(summary.finished_at),
    }


def format_summary_text(summary: BatchSummary) -> str:
    """Format a batch summary as plain text for the terminal."""
    lines = [
        "SKU Search Summary",
        "=" * 40,
        f"Total searched:  {summary.total}",
        f"Found:           {summary.found_count}",
        f"Partial matches: {summary.partial_match_count}",
        f"Not found:       {summary.not_found_count}",
        f"Success rate:    {summary.success_rate}%",
        f"Processing time: {summary.processing_time_seconds:.2f}s",
    ]

    if summary.results:
        lines.append("")
        lines.append("Results:")
        lines.append("-" * 40)
        for result in summary.results:
            detail = ""
            if result.matched_product is not None:
                detail = f" -> {result.matched_product.sku} ({result.matched_product.name})"
            lines.append(f"  {result.query}: {STATUS_LABELS[result.status]}{detail}")

    return "\n".join(lines)


def write_export(
    summary: BatchSummary,
    path: Path,
    fmt: Union[ExportFormat, str] = ExportFormat.JSON,
    fields: Optional[Sequence[FieldSpec]] = None,
    status_filter: str = "all",
) -> int:
    """Write batch results to a JSON or CSV file.

    JSON layout::

        {"export_info": {timestamp, format, filter, total_results, summary},
         "results": [row, ...]}

    CSV layout: one header row of column labels, then one row per result.

    Args:
        summary: Batch to export
        path: Destination file; a directory gets the default filename
        fmt: json or csv
        fields: Columns in output order
        status_filter: ``all`` or a MatchStatus value

    Returns:
        Number of rows written
    """
    export_format = ExportFormat(fmt)
    selected_fields = list(fields or DEFAULT_EXPORT_FIELDS)
    results = filter_results(summary.results, status_filter)
    rows = [build_export_row(result, selected_fields) for result in results]

    path = Path(path)
    if path.is_dir():
        path = path / default_export_filename(export_format)
    path.parent.mkdir(parents=True, exist_ok=True)

    if export_format == ExportFormat.JSON:
        payload = {
            "export_info": {
                "timestamp": format_timestamp(utc_now()),
                "format": export_format.value,
                "filter": status_filter,
                "total_results": len(rows),
                "summary": build_summary_dict(summary),
            },
            "results": rows,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
    else:
        headers = [FIELD_LABELS[ExportField(column)] for column in selected_fields]
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=headers)
            writer.writeheader()
            writer.writerows(rows)

    logger.info(
        f"Exported {len(rows)} results to {path}",
        extra={
            "event": "export.written",
            "export_format": export_format.value,
            "status_filter": status_filter,
            "row_count": len(rows),
            "path": str(path),
        },
    )
    return len(rows)
