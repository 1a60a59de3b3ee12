"""
Command-line entry point for the pool capacity advisor.

Collects the region, pool and usage threshold (from flags or interactive
prompts), runs one ``PoolCapacityAnalyzer`` pass and prints the report.
"""

import argparse
import asyncio
import logging
import sys
from enum import Enum
from typing import TextIO, TypeVar

from config.settings import get_settings
from dotenv import load_dotenv
from entities.pool_optimizer import PoolCapacityAnalyzer, create_analyzer_clients
from entities.shared import ConsoleReporter
from models import PoolAnalysisReport, PoolAnalysisRequest, PoolName, TenantName

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def configure_logging(level: str) -> None:
    """Configure root logging and quiet chatty SDK loggers."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("agent_framework").setLevel(logging.WARNING)


def parse_enum(enum_type: type[E], text: str | None, default: E) -> E:
    """Parse operator input into an enum member, matching its value or name exactly."""
    if text is None:
        return default
    text = text.strip()
    for member in enum_type:
        if text in (member.value, member.name):
            return member
    return default


def parse_threshold(text: str | None, default: int) -> int:
    """Parse a 0-100 percentage, falling back to ``default`` on anything else."""
    if text is None:
        return default
    try:
        value = int(text.strip())
    except ValueError:
        return default
    return value if 0 <= value <= 100 else default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pool-advisor",
        description="Recommend a target cluster count for a compute pool from its Kusto telemetry",
    )
    parser.add_argument("--region", help=f"Region name ({', '.join(t.value for t in TenantName)})")
    parser.add_argument("--pool", help=f"Pool name ({', '.join(p.value for p in PoolName)})")
    parser.add_argument("--max-usage", help="Maximum cluster usage percentage threshold (0-100)")
    return parser


def collect_request(args: argparse.Namespace, default_usage: int) -> PoolAnalysisRequest:
    """Build the analysis request, prompting for anything not given on the command line."""
    print("Welcome to the Pool Capacity Advisor!")
    if args.region is None or args.pool is None or args.max_usage is None:
        print("\nPlease provide the following information:")

    region_text = args.region if args.region is not None else input("Region Name: ")
    pool_text = args.pool if args.pool is not None else input("Pool Name: ")
    usage_text = (
        args.max_usage
        if args.max_usage is not None
        else input("Maximum Cluster Usage Percentage Threshold (0-100): ")
    )

    return PoolAnalysisRequest(
        region=parse_enum(TenantName, region_text, TenantName.NONE),
        pool=parse_enum(PoolName, pool_text, PoolName.NONE),
        max_cluster_usage=parse_threshold(usage_text, default_usage),
    )


def print_report(report: PoolAnalysisReport, out: TextIO) -> None:
    """Print every section of an analysis report."""
    if report.query_design_response:
        print("\n=== AGENT-DESIGNED POOL ANALYSIS QUERIES ===", file=out)
        print(report.query_design_response, file=out)

    if report.query_results:
        print("\n=== QUERY EXECUTION SUMMARY ===", file=out)
        print(f"Total queries executed: {len(report.query_results)}", file=out)
        print(f"Successful queries: {report.success_count}", file=out)
        print(f"Failed queries: {report.failure_count}", file=out)

    if report.error:
        print(f"\n{report.error}", file=out)
        return

    print("\n=== DATA-VALIDATED CLUSTER COUNT RECOMMENDATIONS ===", file=out)
    print(report.recommendation, file=out)


async def run(request: PoolAnalysisRequest, out: TextIO) -> PoolAnalysisReport:
    """Run one analysis with production clients."""
    clients = create_analyzer_clients(get_settings(), reporter=ConsoleReporter(out))
    return await PoolCapacityAnalyzer(clients).analyze(request)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    args = build_parser().parse_args(argv)
    request = collect_request(args, settings.default_max_cluster_usage)

    print("\n--- Collected Parameters ---")
    print(f"Region Name: {request.region.value}")
    print(f"Pool Name: {request.pool.value}")
    print(f"Maximum Cluster Usage Percentage Threshold: {request.max_cluster_usage}%")

    if request.pool is PoolName.NONE:
        print("Invalid pool or region name provided. Please ensure you enter valid names.")
        return 2

    try:
        report = asyncio.run(run(request, sys.stdout))
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        print(f"Configuration error: {exc}")
        return 1

    print_report(report, sys.stdout)
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
