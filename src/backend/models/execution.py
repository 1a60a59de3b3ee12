"""
Pool analysis request and report models.

The request carries what the operator typed at the console; the report
collects every intermediate artefact of one analysis run.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TenantName(str, Enum):
    """Regions (tenants) whose pools can be analyzed."""

    NONE = "None"
    CBN = "CBN"
    CDM = "CDM"
    MXC = "MXC"
    AM = "AM"
    ILC = "ILC"
    BL = "BL"
    CDN = "CDN"


class PoolName(str, Enum):
    """Compute pools that can be analyzed."""

    NONE = "None"
    ACI = "ACI"
    ACIBYOVNET = "ACIBYOVNET"
    ACIBYOVNET2 = "ACIBYOVNET2"
    ACI_ZONE1 = "ACI_Zone1"
    ACI_ZONE2 = "ACI_Zone2"
    ACI_ZONE3 = "ACI_Zone3"
    ACIBYOVNET_SINGLE_TENANT = "ACIBYOVNETSingleTenant"
    ACIBYOVNET_ZONE1 = "ACIBYOVNET_Zone1"
    ACIBYOVNET_ZONE2 = "ACIBYOVNET_Zone2"
    ACIBYOVNET_ZONE3 = "ACIBYOVNET_Zone3"
    ACIBYOVNET2_ZONE1 = "ACIBYOVNET2_Zone1"
    ACIBYOVNET2_ZONE2 = "ACIBYOVNET2_Zone2"
    ACIBYOVNET2_ZONE3 = "ACIBYOVNET2_Zone3"


class PoolAnalysisRequest(BaseModel):
    """Operator input for one pool capacity analysis."""

    region: TenantName = Field(default=TenantName.NONE, description="Region / tenant name")
    pool: PoolName = Field(default=PoolName.NONE, description="Pool to analyze")
    max_cluster_usage: int = Field(
        default=85,
        ge=0,
        le=100,
        description="Maximum cluster usage percentage the recommendation must respect",
    )


class PoolAnalysisReport(BaseModel):
    """
    Everything produced by one analysis run.

    ``query_results`` maps ``Query_<n>`` to the rendered table text or an
    error string, in execution order.
    """

    request: PoolAnalysisRequest
    query_design_response: str = Field(
        default="", description="Raw model response that drafted the queries"
    )
    queries: list[str] = Field(
        default_factory=list, description="Validated queries extracted from the response"
    )
    query_results: dict[str, str] = Field(default_factory=dict)
    success_count: int = Field(default=0, ge=0)
    failure_count: int = Field(default=0, ge=0)
    recommendation: str = Field(
        default="", description="Final data-driven recommendation from the analysis agent"
    )
    error: str = Field(default="", description="Why the run stopped early, if it did")

    @property
    def succeeded(self) -> bool:
        """Whether the run reached a recommendation."""
        return not self.error and bool(self.recommendation)
