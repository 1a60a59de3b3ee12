"""Shared test fixtures for the pool capacity advisor."""

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

# Ensure src/backend/ is on the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src" / "backend"))

from config.settings import Settings
from entities.shared.protocols import NoOpReporter

# ---------------------------------------------------------------------------
# Protocol fakes
# ---------------------------------------------------------------------------


class FakeKustoSource:
    """In-memory fake satisfying the ``KustoQuerySource`` protocol.

    Returns canned columns/rows (or raises ``error``) and records whether
    the session was opened and closed.
    """

    def __init__(
        self,
        columns: list[str] | None = None,
        rows: Sequence[Sequence[Any]] | None = None,
        error: Exception | None = None,
        enter_error: Exception | None = None,
    ) -> None:
        self.columns: list[str] = columns or []
        self.rows: Sequence[Sequence[Any]] = rows or []
        self.error = error
        self.enter_error = enter_error
        self.opened_with: tuple[str, str] | None = None
        self.entered = False
        self.exited = False
        self.queries: list[str] = []

    def __call__(self, cluster_uri: str, database: str) -> "FakeKustoSource":
        """Act as the source factory passed to ``execute_kusto_query``."""
        self.opened_with = (cluster_uri, database)
        return self

    async def __aenter__(self) -> "FakeKustoSource":
        if self.enter_error:
            raise self.enter_error
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.exited = True

    async def execute_query(self, query: str) -> tuple[list[str], Sequence[Sequence[Any]]]:
        """Return the canned result, or raise the configured error."""
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.columns, self.rows


class FakeQueryRunner:
    """In-memory fake satisfying the ``QueryRunner`` protocol.

    Returns results in call order; an ``Exception`` entry is raised.
    """

    def __init__(self, results: list[str | Exception] | None = None) -> None:
        self.results: list[str | Exception] = list(results or [])
        self.calls: list[str] = []

    async def run(self, query: str) -> str:
        """Return (or raise) the next canned result."""
        self.calls.append(query)
        result = self.results.pop(0) if self.results else "col\n1"
        if isinstance(result, Exception):
            raise result
        return result


class FakeAgentResponse:
    """Minimal stand-in for an agent run response."""

    def __init__(self, text: str | None) -> None:
        self.text = text


class FakeAgent:
    """Stand-in for ``ChatAgent`` returning canned texts and recording calls."""

    def __init__(self, responses: list[str | Exception] | None = None) -> None:
        self.responses: list[str | Exception] = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.thread = object()

    def get_new_thread(self) -> object:
        """Return the single fake thread."""
        return self.thread

    async def run(self, prompt: str, **kwargs: Any) -> FakeAgentResponse:
        """Record the call and return (or raise) the next canned response."""
        self.calls.append({"prompt": prompt, **kwargs})
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, Exception):
            raise response
        return FakeAgentResponse(response)


class SpyReporter:
    """Spy satisfying the ``ProgressReporter`` protocol.

    Captures every ``step_start`` / ``step_end`` call for assertions.
    """

    def __init__(self) -> None:
        self.events: list[dict[str, str]] = []

    def step_start(self, step: str) -> None:
        """Record a step-start event."""
        self.events.append({"step": step, "status": "started"})

    def step_end(self, step: str) -> None:
        """Record a step-end event."""
        self.events.append({"step": step, "status": "completed"})


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Return a ``Settings`` instance populated with safe test defaults."""
    return Settings(
        azure_openai_endpoint="https://test.openai.azure.com",
        azure_openai_api_key="test-key",
        azure_openai_deployment_name="test-model",
        kusto_cluster_uri="https://test.eastus.kusto.windows.net",
        kusto_database="TestDB",
    )


@pytest.fixture
def fake_query_runner() -> FakeQueryRunner:
    """Return an empty ``FakeQueryRunner`` instance."""
    return FakeQueryRunner()


@pytest.fixture
def spy_reporter() -> SpyReporter:
    """Return a fresh ``SpyReporter`` instance."""
    return SpyReporter()


@pytest.fixture
def noop_reporter() -> NoOpReporter:
    """Return a ``NoOpReporter`` from the protocols module."""
    return NoOpReporter()
