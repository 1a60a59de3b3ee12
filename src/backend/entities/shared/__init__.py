"""Shared utilities for the advisor stages."""

from .kusto_client import KustoQueryClient, get_kusto_credential
from .protocols import ConsoleReporter, NoOpReporter, ProgressReporter, QueryRunner

__all__ = [
    "ConsoleReporter",
    "KustoQueryClient",
    "NoOpReporter",
    "ProgressReporter",
    "QueryRunner",
    "get_kusto_credential",
]
