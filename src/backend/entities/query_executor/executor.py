"""KQL query execution and result rendering.

``execute_kusto_query`` is the only boundary to the remote engine. It never
raises: every failure is returned as an error-prefixed string so callers
branch on content instead of catching exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from entities.query_extractor import clean_query
from entities.shared.kusto_client import KustoQueryClient
from entities.shared.protocols import KustoQuerySource
from entities.shared.table_format import (
    CELL_SEPARATOR,
    DEFAULT_ROW_LIMIT,
    NULL_CELL,
    ROW_SEPARATOR,
    error_result,
    truncation_marker,
)

logger = logging.getLogger(__name__)

EMPTY_QUERY_ERROR = "Query is empty or invalid after cleaning"

SourceFactory = Callable[[str, str], KustoQuerySource]


def _format_cell(value: Any) -> str:
    return NULL_CELL if value is None else str(value)


def render_table(
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    row_limit: int = DEFAULT_ROW_LIMIT,
) -> str:
    """Render a result set as tab/newline-delimited text.

    Args:
        columns: Column names, in result order.
        rows: Row values, in result order. Consumed lazily, at most
            ``row_limit + 1`` rows are read.
        row_limit: Maximum number of data rows to render.

    Returns:
        Header line, up to ``row_limit`` data lines and, when the source
        had more rows, the truncation marker line.
    """
    lines = [CELL_SEPARATOR.join(columns)]
    truncated = False

    for count, row in enumerate(rows):
        if count >= row_limit:
            truncated = True
            break
        lines.append(CELL_SEPARATOR.join(_format_cell(value) for value in row))

    if truncated:
        lines.append(truncation_marker(row_limit))

    return ROW_SEPARATOR.join(lines).rstrip()


async def execute_kusto_query(
    query: str,
    cluster_uri: str,
    database: str,
    *,
    row_limit: int = DEFAULT_ROW_LIMIT,
    source_factory: SourceFactory = KustoQueryClient,
) -> str:
    """Execute a single KQL query and render the result.

    The query is cleaned again before execution. A fresh session is opened
    for this call and released before returning.

    Args:
        query: Validated KQL query.
        cluster_uri: Kusto cluster URI.
        database: Database name.
        row_limit: Maximum number of data rows to render.
        source_factory: Builds the query session from (cluster_uri, database).

    Returns:
        Rendered table text, or ``Error executing Kusto query: <message>``.
    """
    try:
        cleaned = clean_query(query)
        if not cleaned:
            return error_result(EMPTY_QUERY_ERROR)

        async with source_factory(cluster_uri, database) as session:
            columns, rows = await session.execute_query(cleaned)
            return render_table(columns, rows, row_limit)

    except Exception as exc:
        logger.error("KQL execution error: %s", exc)
        return error_result(str(exc))
