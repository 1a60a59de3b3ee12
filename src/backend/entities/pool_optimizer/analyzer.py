"""PoolCapacityAnalyzer: drafts, runs and analyzes pool telemetry queries.

One run:
1. asks the advisor agent to design KQL queries for the pool,
2. extracts validated queries from the response,
3. executes them one after another as ``Query_1``, ``Query_2``, ...,
4. stops with a report of the failures if any query failed,
5. otherwise asks the agent, on the same thread and with the Kusto
   analysis functions as tools, for a data-driven recommendation.
"""

import logging

from entities.kusto_analysis import KustoAnalysisPlugin
from entities.query_extractor import extract_queries
from entities.shared.table_format import GENERIC_ERROR_PREFIX, is_error_result
from models import PoolAnalysisReport, PoolAnalysisRequest

from .clients import AnalyzerClients
from .prompts import build_analysis_prompt, build_query_design_prompt

logger = logging.getLogger(__name__)

RESPONSE_PREVIEW_CHARS = 500


def query_name(index: int) -> str:
    """Name of the query at zero-based ``index``."""
    return f"Query_{index + 1}"


def _preview(text: str) -> str:
    if len(text) > RESPONSE_PREVIEW_CHARS:
        return text[:RESPONSE_PREVIEW_CHARS] + "..."
    return text


class PoolCapacityAnalyzer:
    """Runs the full pool capacity analysis over injected clients."""

    def __init__(self, clients: AnalyzerClients) -> None:
        self._clients = clients

    async def analyze(self, request: PoolAnalysisRequest) -> PoolAnalysisReport:
        """Analyze one pool and return every intermediate result.

        Args:
            request: Region, pool and usage threshold.

        Returns:
            The report. ``error`` is set when the run stopped before a
            recommendation could be produced.
        """
        report = PoolAnalysisReport(request=request)
        agent = self._clients.agent
        reporter = self._clients.reporter
        thread = agent.get_new_thread()

        logger.info(
            "Analyzing pool %s in region %s (max usage %d%%)",
            request.pool.value,
            request.region.value,
            request.max_cluster_usage,
        )

        step_name = "Designing pool analysis queries"
        reporter.step_start(step_name)
        try:
            prompt = build_query_design_prompt(
                request, self._clients.table_name, self._clients.columns
            )
            response = await agent.run(prompt, thread=thread)
            report.query_design_response = response.text or ""
        except Exception as exc:
            logger.exception("Query design failed")
            report.error = f"Query design failed: {exc}"
            return report
        finally:
            reporter.step_end(step_name)

        report.queries = extract_queries(report.query_design_response)
        if not report.queries:
            report.error = (
                "No valid queries were extracted from the agent's response. "
                f"Agent response preview: {_preview(report.query_design_response)}"
            )
            return report

        await self._execute_queries(report)

        failed = {
            name: result
            for name, result in report.query_results.items()
            if not result.strip() or is_error_result(result)
        }
        if failed:
            details = "; ".join(f"{name}: {result or '(empty result)'}" for name, result in failed.items())
            report.error = f"Not all queries executed successfully. {details}"
            return report

        step_name = "Data-driven cluster count analysis"
        reporter.step_start(step_name)
        try:
            plugin = KustoAnalysisPlugin(report.query_results)
            response = await agent.run(
                build_analysis_prompt(request),
                thread=thread,
                tools=plugin.as_tools(),
            )
            report.recommendation = response.text or ""
        except Exception as exc:
            logger.exception("Data-driven analysis failed")
            report.error = f"Data-driven analysis failed: {exc}"
        finally:
            reporter.step_end(step_name)

        return report

    async def _execute_queries(self, report: PoolAnalysisReport) -> None:
        """Run every extracted query in order, capturing each outcome by name."""
        reporter = self._clients.reporter
        step_name = f"Executing {len(report.queries)} pool analysis queries"
        reporter.step_start(step_name)

        for index, query in enumerate(report.queries):
            name = query_name(index)
            try:
                result = await self._clients.query_runner.run(query)
            except Exception as exc:
                logger.exception("%s raised during execution", name)
                result = f"{GENERIC_ERROR_PREFIX} {exc}"

            report.query_results[name] = result
            if is_error_result(result):
                logger.warning("%s failed: %s", name, result)
            else:
                logger.info("%s completed successfully", name)

        report.failure_count = sum(1 for r in report.query_results.values() if is_error_result(r))
        report.success_count = len(report.query_results) - report.failure_count
        logger.info(
            "Query execution summary: %d total, %d succeeded, %d failed",
            len(report.query_results),
            report.success_count,
            report.failure_count,
        )
        reporter.step_end(step_name)
