# lexia/estratega/schemas/risk.py
"""Schema for risk analysis stage output."""

from pydantic import Field

from .common import CamelModel, RiskLevel


class RiskFactor(CamelModel):
    """A single identified risk with its score and mitigation."""

    id: str = Field(..., description="Short identifier unique within the matrix")
    name: str = Field(..., description="Short name of the risk")
    description: str = Field(..., description="What could go wrong for this case")
    score: float = Field(..., ge=0, le=10, description="0 = no risk, 10 = critical risk")
    level: RiskLevel = Field(..., description="Level bucket of the score")
    category: str = Field(
        ...,
        description="Free text, e.g. probatorio, procesal, económico",
    )
    mitigation: str = Field(..., description="Concrete, actionable mitigation")


class RiskMatrix(CamelModel):
    """Output from risk analysis stage."""

    factors: list[RiskFactor] = Field(..., min_length=3, max_length=8)
    overall_score: float = Field(..., ge=0, le=10)
    risk_level: RiskLevel
    summary: str
    recommendations: list[str] = Field(..., min_length=2, max_length=6)
