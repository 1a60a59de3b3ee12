"""Protocol interfaces for I/O boundaries.

These protocols enable dependency injection for testability.
Production implementations wrap the Kusto SDK; test fakes
return canned data with zero network or filesystem access.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any, Protocol, TextIO, runtime_checkable


@runtime_checkable
class KustoQuerySource(Protocol):
    """A scoped session that runs KQL and returns the primary result table.

    Used as ``async with source as session``; the session is released on
    every exit path.
    """

    async def __aenter__(self) -> KustoQuerySource: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> Any: ...

    async def execute_query(self, query: str) -> tuple[list[str], Sequence[Sequence[Any]]]:
        """Execute a KQL query.

        Args:
            query: Cleaned KQL text.

        Returns:
            Tuple of (column names, rows of raw cell values).
        """
        ...


@runtime_checkable
class QueryRunner(Protocol):
    """Runs one validated query and returns rendered table text.

    Implementations never raise; failures come back as error-prefixed
    strings.
    """

    async def run(self, query: str) -> str:
        """Execute a query and render its result.

        Args:
            query: Validated KQL query.

        Returns:
            Rendered table text or an error string.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports step-level progress of an analysis run."""

    def step_start(self, step: str) -> None:
        """Signal that a named step has started.

        Args:
            step: Human-readable step label.
        """
        ...

    def step_end(self, step: str) -> None:
        """Signal that a named step has completed.

        Args:
            step: Human-readable step label (must match a prior start).
        """
        ...


# ---------------------------------------------------------------------------
# Concrete implementations
# ---------------------------------------------------------------------------


class NoOpReporter:
    """ProgressReporter that silently discards all events.

    Useful in tests and non-interactive contexts.
    """

    def step_start(self, step: str) -> None:
        """No-op."""

    def step_end(self, step: str) -> None:
        """No-op."""


class ConsoleReporter:
    """ProgressReporter that prints step banners and durations to a stream.

    Args:
        stream: Text stream to write to (the CLI passes ``sys.stdout``).
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._start_times: dict[str, float] = {}

    def step_start(self, step: str) -> None:
        """Record start time and print a banner.

        Args:
            step: Human-readable step label.
        """
        self._start_times[step] = time.time()
        print(f"\n=== {step.upper()} ===", file=self._stream)

    def step_end(self, step: str) -> None:
        """Print how long the step took.

        Args:
            step: Human-readable step label (must match a prior start).
        """
        start_time = self._start_times.pop(step, None)
        if start_time is not None:
            duration_ms = int((time.time() - start_time) * 1000)
            print(f"({step} finished in {duration_ms} ms)", file=self._stream)
