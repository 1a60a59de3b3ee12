"""Rendered result-table text format shared by the executor and analysis functions.

A rendered table is plain text: ``\\n`` between rows, ``\\t`` between cells,
the header first, ``null`` for missing cells, and an optional trailing
truncation marker line. A failed execution is rendered as a single string
starting with ``ERROR_PREFIX``.
"""

ROW_SEPARATOR = "\n"
CELL_SEPARATOR = "\t"
NULL_CELL = "null"

DEFAULT_ROW_LIMIT = 100

ERROR_PREFIX = "Error executing Kusto query: "

# Prefix the orchestration layer uses when an execution raised unexpectedly
GENERIC_ERROR_PREFIX = "Error:"

TRUNCATION_TEXT = "results truncated to first"

REQUIRED_TABLE = "LogExecutionClusterInfo"


def truncation_marker(row_limit: int = DEFAULT_ROW_LIMIT) -> str:
    """Return the marker line appended when rows were cut off."""
    return f"... ({TRUNCATION_TEXT} {row_limit} rows)"


TRUNCATION_MARKER = truncation_marker()


def error_result(message: str) -> str:
    """Format an execution failure message."""
    return f"{ERROR_PREFIX}{message}"


def is_error_result(text: str) -> bool:
    """Check whether a stored result string represents a failed query."""
    return text.startswith(ERROR_PREFIX.rstrip()) or text.startswith(GENERIC_ERROR_PREFIX)


def split_lines(text: str) -> list[str]:
    """Split rendered table text into its non-empty lines."""
    return [line for line in text.split(ROW_SEPARATOR) if line]


def split_cells(line: str) -> list[str]:
    """Split one rendered row into its cells."""
    return line.split(CELL_SEPARATOR)
