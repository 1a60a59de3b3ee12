"""Pool Optimizer package: orchestrates query design, execution and analysis."""

from .analyzer import PoolCapacityAnalyzer
from .clients import AnalyzerClients, KustoQueryRunner, create_analyzer_clients

__all__ = [
    "AnalyzerClients",
    "KustoQueryRunner",
    "PoolCapacityAnalyzer",
    "create_analyzer_clients",
]
