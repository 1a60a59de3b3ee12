"""Unit tests for KustoAnalysisPlugin, the tool surface handed to the agent."""

from __future__ import annotations

import json

from entities.kusto_analysis import KustoAnalysisPlugin
from entities.kusto_analysis.functions import QUERY_NOT_FOUND
from entities.shared.table_format import ERROR_PREFIX

RESULTS = {
    "Query_1": "clusterId\tcpuLoad\nc1\t40\nc2\t60",
    "Query_2": f"{ERROR_PREFIX}Semantic error",
}


class TestKustoAnalysisPlugin:
    """Tool methods bound to one results mapping."""

    def test_reads_bound_results(self) -> None:
        plugin = KustoAnalysisPlugin(RESULTS)
        assert plugin.get_query_results("Query_1") == RESULTS["Query_1"]
        assert plugin.get_query_results("Query_3") == QUERY_NOT_FOUND

    def test_statistics_over_fetched_results(self) -> None:
        plugin = KustoAnalysisPlugin(RESULTS)
        text = plugin.get_query_results("Query_1")
        assert plugin.extract_numeric_values(text, "cpuLoad") == "40, 60"
        stats = json.loads(plugin.calculate_statistics(text, "cpuLoad"))
        assert stats["average"] == 50

    def test_summary_and_validation(self) -> None:
        plugin = KustoAnalysisPlugin(RESULTS)
        summary = plugin.get_available_queries()
        assert "Query_1: SUCCESS (2 rows, 2 columns)" in summary
        assert "Query_2: FAILED" in summary
        assert plugin.validate_data_existence("Query_2", "cpuLoad").startswith("Query Query_2 failed")

    def test_mapping_is_held_by_reference_and_not_mutated(self) -> None:
        results = dict(RESULTS)
        plugin = KustoAnalysisPlugin(results)
        plugin.get_available_queries()
        plugin.validate_data_existence("Query_1", "missing")
        assert results == RESULTS

        results["Query_3"] = "a\n1"
        assert plugin.get_query_results("Query_3") == "a\n1"

    def test_as_tools_order(self) -> None:
        plugin = KustoAnalysisPlugin(RESULTS)
        names = [tool.__name__ for tool in plugin.as_tools()]
        assert names == [
            "get_available_queries",
            "validate_data_existence",
            "get_query_results",
            "extract_numeric_values",
            "calculate_statistics",
        ]

    def test_tools_have_descriptions(self) -> None:
        for tool in KustoAnalysisPlugin({}).as_tools():
            assert tool.__doc__
