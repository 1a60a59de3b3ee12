"""
Shared Kusto client for executing KQL queries.

This module provides a reusable async client for executing queries
against an Azure Data Explorer (Kusto) cluster using Entra ID authentication.
"""

import asyncio
import logging
from typing import Any

from azure.identity import DefaultAzureCredential, InteractiveBrowserCredential
from azure.kusto.data import KustoClient, KustoConnectionStringBuilder
from config.settings import get_settings

logger = logging.getLogger(__name__)

AUTH_MODE_INTERACTIVE = "interactive"
AUTH_MODE_DEFAULT = "default"


def get_kusto_credential(auth_mode: str | None = None, client_id: str | None = None):
    """
    Build the token credential used to sign in to the cluster.

    Args:
        auth_mode: ``interactive`` prompts the operator in a browser,
            ``default`` uses ``DefaultAzureCredential``. Defaults to settings.
        client_id: User-assigned managed identity for ``default`` mode.

    Returns:
        An ``azure.identity`` credential.
    """
    settings = get_settings()
    mode = (auth_mode or settings.kusto_auth_mode).lower()
    client_id = client_id or settings.azure_client_id

    if mode == AUTH_MODE_DEFAULT:
        logger.info("Using DefaultAzureCredential for Kusto, AZURE_CLIENT_ID=%s", client_id)
        if client_id:
            return DefaultAzureCredential(managed_identity_client_id=client_id)
        return DefaultAzureCredential()

    if mode != AUTH_MODE_INTERACTIVE:
        raise ValueError(f"Unknown Kusto auth mode: {mode!r}")

    logger.info("Using interactive browser sign-in for Kusto")
    return InteractiveBrowserCredential()


class KustoQueryClient:
    """
    Async context manager for Kusto query operations.

    Each instance owns one ``KustoClient`` session which is closed on exit.

    Usage:
        async with KustoQueryClient(cluster_uri, database) as client:
            columns, rows = await client.execute_query("LogExecutionClusterInfo | take 10")
    """

    def __init__(
        self,
        cluster_uri: str | None = None,
        database: str | None = None,
        credential: Any = None,
    ):
        """
        Initialize the Kusto client.

        Args:
            cluster_uri: Kusto cluster URI. Defaults to the KUSTO_CLUSTER_URI setting.
            database: Database name. Defaults to the KUSTO_DATABASE setting.
            credential: Token credential. Defaults to ``get_kusto_credential()``.
        """
        settings = get_settings()
        self.cluster_uri = cluster_uri or settings.kusto_cluster_uri
        self.database = database or settings.kusto_database
        self._credential = credential
        self._client: KustoClient | None = None

    async def __aenter__(self):
        """Open the Kusto session."""
        if not self.cluster_uri:
            raise ValueError("KUSTO_CLUSTER_URI environment variable is required")
        if not self.database:
            raise ValueError("KUSTO_DATABASE environment variable is required")

        credential = self._credential or get_kusto_credential()
        kcsb = KustoConnectionStringBuilder.with_azure_token_credential(self.cluster_uri, credential)
        self._client = KustoClient(kcsb)
        logger.info("Kusto session opened: %s/%s", self.cluster_uri, self.database)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the Kusto session."""
        if self._client:
            self._client.close()
            self._client = None
            logger.info("Kusto session closed: %s/%s", self.cluster_uri, self.database)

    async def execute_query(self, query: str) -> tuple[list[str], list[list[Any]]]:
        """
        Execute a KQL query and return the primary result table.

        Args:
            query: The KQL query to execute

        Returns:
            Tuple of (column names, rows) in the order the cluster returned
            them. Each row is a list of raw cell values.

        Raises:
            RuntimeError: If the session was not opened with ``async with``.
        """
        if self._client is None:
            raise RuntimeError("Kusto session not established. Use 'async with' context manager.")

        logger.info("Executing KQL query: %s", query[:200])

        response = await asyncio.to_thread(self._client.execute, self.database, query)
        primary = response.primary_results[0] if response.primary_results else None
        if primary is None:
            return [], []

        columns = [column.column_name for column in primary.columns]
        rows = [[row[i] for i in range(len(columns))] for row in primary]

        logger.info("Query executed successfully. Returned %d rows.", len(rows))
        return columns, rows
