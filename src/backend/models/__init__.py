"""
Shared models for entities.

These models are used across the extractor, executor, analysis functions
and the pool analyzer. All models are re-exported here.
"""

from .analysis import ColumnStatistics, DataValidationResult
from .execution import PoolAnalysisReport, PoolAnalysisRequest, PoolName, TenantName

__all__ = [
    # Analysis (tool results)
    "ColumnStatistics",
    "DataValidationResult",
    # Execution (operator input and run report)
    "PoolAnalysisReport",
    "PoolAnalysisRequest",
    "PoolName",
    "TenantName",
]
