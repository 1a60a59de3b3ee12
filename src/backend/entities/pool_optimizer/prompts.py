"""Prompt templates for the pool capacity advisor.

Templates live next to this module as markdown files and are filled with
``str.format``.
"""

from pathlib import Path

from models import PoolAnalysisRequest

_PROMPT_DIR = Path(__file__).parent

AGENT_INSTRUCTIONS = (
    "You are a capacity planning assistant for compute pools. "
    "You write Kusto (KQL) queries when asked and, when analysis functions are "
    "available, you base every number you report on their results."
)


def load_prompt(name: str) -> str:
    """Load a markdown prompt template from this folder."""
    prompt_path = _PROMPT_DIR / name
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8")


def build_query_design_prompt(request: PoolAnalysisRequest, table_name: str, columns: str) -> str:
    """Prompt asking the model to draft the pool analysis queries.

    Args:
        request: Operator input (region, pool).
        table_name: Telemetry table the queries must start from.
        columns: Comma-separated column names available in the table.

    Returns:
        The formatted prompt.
    """
    return load_prompt("query_design_prompt.md").format(
        table_name=table_name,
        columns=columns,
        region=request.region.value,
        pool=request.pool.value,
    )


def build_analysis_prompt(request: PoolAnalysisRequest) -> str:
    """Prompt asking the model for a data-driven cluster count recommendation."""
    return load_prompt("analysis_prompt.md").format(
        region=request.region.value,
        pool=request.pool.value,
        threshold=request.max_cluster_usage,
    )
