"""Kusto Analysis package: deterministic functions over rendered result tables."""

from .functions import (
    calculate_statistics,
    extract_numeric_values,
    get_available_queries,
    get_query_results,
    validate_data_existence,
)
from .plugin import KustoAnalysisPlugin

__all__ = [
    "KustoAnalysisPlugin",
    "calculate_statistics",
    "extract_numeric_values",
    "get_available_queries",
    "get_query_results",
    "validate_data_existence",
]
