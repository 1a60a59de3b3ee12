"""Deterministic analysis functions over rendered Kusto result tables.

Every function here is total: bad input, a missing column or a failed query
produces a descriptive message or a record with its failure fields set,
never an exception. Inputs are read, never mutated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from entities.shared.table_format import (
    TRUNCATION_TEXT,
    is_error_result,
    split_cells,
    split_lines,
)
from models import ColumnStatistics, DataValidationResult

logger = logging.getLogger(__name__)

VALUE_SEPARATOR = ", "
PREVIEW_SIZE = 10
PERCENTILE = 0.95

QUERY_NOT_FOUND = "Query results not found for the specified query name."
NO_VALID_DATA = "No valid data available"
INSUFFICIENT_DATA = "Insufficient data rows"
NO_NUMERIC_VALUES = "No numeric values found"
NO_RESULTS = "No query results available"
NO_DATA = "No data available"
COLUMN_NOT_FOUND_PREFIX = "Column '"

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _column_not_found(column_name: str, headers: list[str]) -> str:
    return (
        f"{COLUMN_NOT_FOUND_PREFIX}{column_name}' not found in results. "
        f"Available columns: {', '.join(headers)}"
    )


def _is_extraction_sentinel(text: str) -> bool:
    """Check whether ``extract_numeric_values`` returned a message instead of values."""
    return text.startswith((NO_VALID_DATA, COLUMN_NOT_FOUND_PREFIX))


def _parse_decimal(value: str) -> float | None:
    candidate = value.strip()
    if not _DECIMAL_RE.fullmatch(candidate):
        return None
    return float(candidate)


def get_query_results(query_results: Mapping[str, str], query_name: str) -> str:
    """Return the stored result text for a query, looked up by exact name.

    Args:
        query_results: Named results in execution order.
        query_name: Identifier such as ``Query_1``.

    Returns:
        The stored table or error text, or a not-found message.
    """
    return query_results.get(query_name, QUERY_NOT_FOUND)


def extract_numeric_values(query_results: str, column_name: str) -> str:
    """Collect the raw cells of one column from a rendered table.

    Values are not parsed; the truncation marker row is skipped, as are
    rows too short to hold the column.

    Args:
        query_results: Rendered table text.
        column_name: Header name, matched exactly.

    Returns:
        Cells joined with ``", "``, or a message when there is no usable
        data or the column does not exist.
    """
    if not query_results or is_error_result(query_results):
        return NO_VALID_DATA

    lines = split_lines(query_results)
    if len(lines) < 2:
        return INSUFFICIENT_DATA

    headers = split_cells(lines[0])
    if column_name not in headers:
        return _column_not_found(column_name, headers)
    column_index = headers.index(column_name)

    values: list[str] = []
    for line in lines[1:]:
        if TRUNCATION_TEXT in line:
            continue
        cells = split_cells(line)
        if len(cells) > column_index:
            values.append(cells[column_index])

    return VALUE_SEPARATOR.join(values)


def calculate_statistics(query_results: str, column_name: str) -> str:
    """Compute summary statistics for a numeric column.

    Non-numeric cells are dropped. The 95th percentile is the nearest-rank
    element ``sorted[floor(count * 0.95)]`` with no interpolation, and
    falls back to 0 if that index is past the end.

    Args:
        query_results: Rendered table text.
        column_name: Header name, matched exactly.

    Returns:
        ``ColumnStatistics`` as indented JSON, or the extraction message,
        or a no-numeric-values message.
    """
    extracted = extract_numeric_values(query_results, column_name)
    if _is_extraction_sentinel(extracted):
        return extracted

    raw_values: list[str] = []
    values: list[float] = []
    for raw in extracted.split(VALUE_SEPARATOR):
        number = _parse_decimal(raw)
        if number is not None:
            raw_values.append(raw.strip())
            values.append(number)

    if not values:
        return NO_NUMERIC_VALUES

    count = len(values)
    ordered = sorted(values)
    percentile_index = int(count * PERCENTILE)
    percentile_95 = ordered[percentile_index] if percentile_index < count else 0.0

    preview = VALUE_SEPARATOR.join(raw_values[:PREVIEW_SIZE])
    if count > PREVIEW_SIZE:
        preview += "..."

    stats = ColumnStatistics(
        column_name=column_name,
        count=count,
        average=round(sum(values) / count, 2),
        minimum=round(ordered[0], 2),
        maximum=round(ordered[-1], 2),
        sum=round(sum(values), 2),
        percentile_95=round(percentile_95, 2),
        raw_values=preview,
    )
    logger.debug("Statistics for %s: count=%d avg=%s", column_name, count, stats.average)
    return stats.model_dump_json(indent=2)


def get_available_queries(query_results: Mapping[str, str]) -> str:
    """Summarize every stored result in execution order.

    Args:
        query_results: Named results in execution order.

    Returns:
        One block per query (status, shape, header, sample row, and a
        warning when no data rows came back), each followed by a blank line.
    """
    if not query_results:
        return NO_RESULTS

    summary: list[str] = []
    for name, results in query_results.items():
        if is_error_result(results):
            summary.append(f"{name}: FAILED - {results}")
        else:
            lines = split_lines(results)
            data_rows = max(0, len(lines) - 1)
            columns = len(split_cells(lines[0])) if lines else 0

            summary.append(f"{name}: SUCCESS ({data_rows} rows, {columns} columns)")
            if lines:
                summary.append(f"  Columns: {lines[0]}")
            if data_rows > 0:
                summary.append(f"  Sample: {lines[1]}")
            else:
                summary.append("  WARNING: No data rows returned - query may have no matching data")
        summary.append("")

    return "\n".join(summary)


def validate_data_existence(
    query_results: Mapping[str, str],
    query_name: str,
    expected_columns: str,
) -> str:
    """Check that a stored result has the expected columns and some data.

    Args:
        query_results: Named results in execution order.
        query_name: Identifier such as ``Query_1``.
        expected_columns: Comma-separated column names; blanks are ignored.

    Returns:
        ``DataValidationResult`` as indented JSON, or a message when the
        query is unknown, failed, or rendered nothing.
    """
    if query_name not in query_results:
        return f"Query {query_name} not found"

    results = query_results[query_name]
    if is_error_result(results):
        return f"Query {query_name} failed: {results}"

    lines = split_lines(results)
    if not lines:
        return NO_DATA

    actual = split_cells(lines[0])
    expected = [col.strip() for col in expected_columns.split(",") if col.strip()]
    missing = [col for col in expected if col not in actual]
    data_rows = len(lines) - 1

    validation = DataValidationResult(
        query_name=query_name,
        expected_columns=expected,
        actual_columns=actual,
        missing_columns=missing,
        data_rows=data_rows,
        validation_passed=not missing and data_rows > 0,
    )
    return validation.model_dump_json(indent=2)
