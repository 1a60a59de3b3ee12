"""
Tabular analysis result models.

These records are serialized to JSON and handed back to the analysis
agent as tool results.
"""

from pydantic import BaseModel, Field


class ColumnStatistics(BaseModel):
    """Summary statistics for one numeric column of a rendered result table."""

    column_name: str = Field(description="Column the statistics were computed from")
    count: int = Field(ge=0, description="Number of values that parsed as decimals")
    average: float = Field(description="Mean, rounded to 2 decimals")
    minimum: float = Field(description="Smallest value, rounded to 2 decimals")
    maximum: float = Field(description="Largest value, rounded to 2 decimals")
    sum: float = Field(description="Sum of all values, rounded to 2 decimals")
    percentile_95: float = Field(
        description="Nearest-rank 95th percentile (sorted[floor(count * 0.95)]), rounded to 2 decimals"
    )
    raw_values: str = Field(
        default="", description="First 10 values, comma-joined, with '...' when more exist"
    )


class DataValidationResult(BaseModel):
    """Outcome of checking a stored query result for expected columns."""

    query_name: str = Field(description="Query identifier, e.g. 'Query_1'")
    expected_columns: list[str] = Field(default_factory=list)
    actual_columns: list[str] = Field(default_factory=list)
    missing_columns: list[str] = Field(
        default_factory=list, description="Expected columns absent from the header"
    )
    data_rows: int = Field(default=0, description="Number of lines after the header")
    validation_passed: bool = Field(
        default=False, description="True only with no missing columns and at least one data row"
    )
