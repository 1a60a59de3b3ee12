"""
Kusto analysis tools bound to one set of query results.

The analysis agent calls these methods through function calling so that
every number in its recommendation comes from the executed queries.
"""

from collections.abc import Callable, Mapping
from typing import Annotated

from pydantic import Field

from . import functions


class KustoAnalysisPlugin:
    """Exposes the analysis functions over a fixed ``NamedResults`` mapping.

    The mapping is held by reference and only read.
    """

    def __init__(self, query_results: Mapping[str, str]) -> None:
        self._query_results = query_results

    def get_query_results(
        self,
        query_name: Annotated[str, Field(description="The query name (Query_1, Query_2, etc.)")],
    ) -> str:
        """Gets the actual Kusto query results for a specific query."""
        return functions.get_query_results(self._query_results, query_name)

    def extract_numeric_values(
        self,
        query_results: Annotated[str, Field(description="The query results string")],
        column_name: Annotated[str, Field(description="The column name to extract values from")],
    ) -> str:
        """Extracts numeric values from Kusto query results."""
        return functions.extract_numeric_values(query_results, column_name)

    def calculate_statistics(
        self,
        query_results: Annotated[str, Field(description="The query results string")],
        column_name: Annotated[str, Field(description="The numeric column name")],
    ) -> str:
        """Calculates statistics from numeric data in query results."""
        return functions.calculate_statistics(query_results, column_name)

    def get_available_queries(self) -> str:
        """Gets a detailed summary of all available query results."""
        return functions.get_available_queries(self._query_results)

    def validate_data_existence(
        self,
        query_name: Annotated[str, Field(description="The query name")],
        expected_columns: Annotated[
            str, Field(description="Expected column names separated by comma")
        ],
    ) -> str:
        """Validates if specific data exists in the query results."""
        return functions.validate_data_existence(self._query_results, query_name, expected_columns)

    def as_tools(self) -> list[Callable[..., str]]:
        """Return the bound tool methods, in the order the prompt introduces them."""
        return [
            self.get_available_queries,
            self.validate_data_existence,
            self.get_query_results,
            self.extract_numeric_values,
            self.calculate_statistics,
        ]
