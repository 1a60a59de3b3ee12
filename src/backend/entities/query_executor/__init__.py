"""Query Executor package for running KQL and rendering result tables."""

from .executor import execute_kusto_query, render_table

__all__ = ["execute_kusto_query", "render_table"]
