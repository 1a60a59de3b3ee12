"""Analyzer client container and Protocol adapters for dependency injection.

``AnalyzerClients`` bundles every I/O dependency the pool analyzer needs.
Production code constructs it via ``create_analyzer_clients()`` from real
Azure clients; tests construct it from in-memory fakes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from config.settings import Settings
from entities.query_executor import execute_kusto_query
from entities.shared.kusto_client import KustoQueryClient, get_kusto_credential
from entities.shared.protocols import NoOpReporter, ProgressReporter, QueryRunner

logger = logging.getLogger(__name__)


class KustoQueryRunner:
    """``QueryRunner`` backed by ``execute_kusto_query``.

    Every ``run`` opens and closes its own Kusto session. All sessions sign
    in with the same credential, so its token is reused across queries.

    Args:
        cluster_uri: Kusto cluster URI.
        database: Database name.
        row_limit: Maximum rendered rows per result.
        credential: Token credential shared by every session.
    """

    def __init__(self, cluster_uri: str, database: str, row_limit: int, credential: Any) -> None:
        self._cluster_uri = cluster_uri
        self._database = database
        self._row_limit = row_limit
        self._source_factory = partial(KustoQueryClient, credential=credential)

    async def run(self, query: str) -> str:
        """Execute a query against the configured cluster.

        Args:
            query: Validated KQL query.

        Returns:
            Rendered table text or an error string.
        """
        return await execute_kusto_query(
            query,
            self._cluster_uri,
            self._database,
            row_limit=self._row_limit,
            source_factory=self._source_factory,
        )


@dataclass
class AnalyzerClients:
    """Every I/O dependency of ``PoolCapacityAnalyzer``.

    Attributes:
        agent: Chat agent exposing ``get_new_thread()`` and ``run()``.
        query_runner: Executes validated queries.
        table_name: Telemetry table named in the query-design prompt.
        columns: Comma-separated columns named in the query-design prompt.
        reporter: Step progress sink.
    """

    agent: Any
    query_runner: QueryRunner
    table_name: str
    columns: str
    reporter: ProgressReporter = field(default_factory=NoOpReporter)


def create_analyzer_clients(
    settings: Settings,
    reporter: ProgressReporter | None = None,
) -> AnalyzerClients:
    """Build production clients from settings.

    Args:
        settings: Application settings.
        reporter: Optional progress reporter (defaults to no-op).

    Returns:
        A ready-to-use ``AnalyzerClients``.

    Raises:
        ValueError: If the chat endpoint or Kusto cluster is not configured,
            or the Kusto auth mode is unknown.
    """
    from .agents import create_advisor_agent, create_chat_client

    if not settings.kusto_cluster_uri:
        raise ValueError("KUSTO_CLUSTER_URI environment variable is required")

    agent = create_advisor_agent(create_chat_client(settings))
    runner = KustoQueryRunner(
        settings.kusto_cluster_uri,
        settings.kusto_database,
        settings.query_row_limit,
        get_kusto_credential(settings.kusto_auth_mode, settings.azure_client_id),
    )
    logger.info(
        "Analyzer clients created (cluster=%s, database=%s)",
        settings.kusto_cluster_uri,
        settings.kusto_database,
    )
    return AnalyzerClients(
        agent=agent,
        query_runner=runner,
        table_name=settings.kusto_table_name,
        columns=settings.kusto_columns,
        reporter=reporter or NoOpReporter(),
    )
