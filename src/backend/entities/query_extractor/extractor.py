"""Pure KQL query extraction and cleaning.

Pulls candidate Kusto queries out of free-form model output, strips
markdown and comment noise, and keeps only the ones that pass a small set
of structural rules. No I/O and no framework dependencies, so it is suitable for
direct unit testing.
"""

from __future__ import annotations

import logging

from entities.shared.table_format import REQUIRED_TABLE

logger = logging.getLogger(__name__)

FENCE = "```"

# Language tags consumed together with an opening fence
FENCE_LANGUAGE_TAGS = ("kusto", "kql")

# Fence markers removed during cleaning, longest first
FENCE_MARKERS = ("```kql", "```kusto", "```")

COMMENT_PREFIXES = ("//", "#")

# Line starts that continue a query in the line-scanning fallback
KQL_CONTINUATION_STARTS = (
    "|",
    "where",
    "summarize",
    "extend",
    "project",
    "order",
    "sort",
    "take",
    "top",
    "limit",
    "join",
    "union",
    "let",
    "datatable",
)


def clean_query(query: str) -> str:
    """Clean and validate a KQL query string.

    Removes fence markers, blank lines and comment lines, then checks the
    result references the telemetry table and looks like a pipeline.

    Args:
        query: Raw query text.

    Returns:
        The cleaned query with lines joined by ``\\n``, or ``""`` when the
        text is rejected.
    """
    if not query or not query.strip():
        return ""

    for marker in FENCE_MARKERS:
        query = query.replace(marker, "")

    lines = [line.strip() for line in query.replace("\r", "\n").split("\n")]
    lines = [line for line in lines if line and not line.startswith(COMMENT_PREFIXES)]

    if not lines:
        return ""

    cleaned = "\n".join(lines)

    if REQUIRED_TABLE not in cleaned:
        logger.debug("Rejected candidate without %s: %s", REQUIRED_TABLE, cleaned[:80])
        return ""

    if "|" not in cleaned and cleaned.strip() != REQUIRED_TABLE:
        logger.debug("Rejected candidate without pipe operator: %s", cleaned[:80])
        return ""

    return cleaned


def _skip_language_tag(text: str, pos: int) -> int:
    """Return the position after an optional ``kql``/``kusto`` tag and whitespace.

    Mirrors ```` ```(?:kql|kusto)?\\s* ````: the tag is matched
    case-insensitively and only consumed as a prefix.
    """
    for tag in FENCE_LANGUAGE_TAGS:
        if text[pos : pos + len(tag)].lower() == tag:
            pos += len(tag)
            break
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def scan_fenced_blocks(text: str) -> list[str]:
    """Return the body of every fenced code block, in order.

    Two-state scanner: ``outside`` looks for an opening fence, ``in_block``
    looks for the nearest closing fence. An unclosed fence yields nothing.

    Args:
        text: Free-form text possibly containing fenced blocks.

    Returns:
        Block bodies with the opening fence and language tag removed.
    """
    blocks: list[str] = []
    state = "outside"
    pos = 0
    body_start = 0

    while True:
        fence_at = text.find(FENCE, pos)
        if fence_at == -1:
            break
        if state == "outside":
            body_start = _skip_language_tag(text, fence_at + len(FENCE))
            pos = body_start
            state = "in_block"
        else:
            blocks.append(text[body_start:fence_at])
            pos = fence_at + len(FENCE)
            state = "outside"

    return blocks


def _is_continuation_line(line: str) -> bool:
    """Check if a trimmed line continues a KQL pipeline."""
    if not line:
        return False
    lowered = line.lower()
    return any(lowered.startswith(start) for start in KQL_CONTINUATION_STARTS)


def extract_queries_line_by_line(text: str) -> list[str]:
    """Fallback extraction for responses without fenced blocks.

    A line starting with the telemetry table opens a query; continuation
    lines are appended until any other line closes it.

    Args:
        text: Free-form text.

    Returns:
        Cleaned, non-empty queries in order of appearance.
    """
    queries: list[str] = []
    current: list[str] = []

    def close_current() -> None:
        if current:
            cleaned = clean_query("\n".join(current))
            if cleaned:
                queries.append(cleaned)
            current.clear()

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if line.startswith(REQUIRED_TABLE):
            close_current()
            current.append(line)
        elif current and _is_continuation_line(line):
            current.append(line)
        else:
            close_current()

    close_current()
    return queries


def extract_queries(text: str) -> list[str]:
    """Extract validated KQL queries from a model response.

    Fenced code blocks are preferred; the line scanner only runs when no
    block yields a valid query. Duplicates are dropped, keeping the first.

    Args:
        text: The model response.

    Returns:
        Distinct cleaned queries, or an empty list if nothing usable was
        found or extraction failed.
    """
    if not text or not text.strip():
        return []

    try:
        queries = [q for q in (clean_query(block.strip()) for block in scan_fenced_blocks(text)) if q]

        if not queries:
            logger.info("No fenced KQL blocks found, falling back to line scanning")
            queries = extract_queries_line_by_line(text)

        distinct = list(dict.fromkeys(queries))
        logger.info("Extracted %d distinct queries", len(distinct))
        return distinct

    except Exception:
        logger.exception("Query extraction error")
        return []
