# lexia/estratega/schemas/analysis.py
"""Schema for the composite strategic analysis and its inputs."""

from pydantic import Field

from .common import CamelModel, ScenarioType
from .jurisprudence import Jurisprudence
from .risk import RiskMatrix
from .scenario import StrategicScenario
from .timeline import StrategicTimeline


class StrategicRecommendations(CamelModel):
    """Output from recommendations stage."""

    primary_strategy: ScenarioType
    reasoning: str
    next_steps: list[str] = Field(..., min_length=3, max_length=7)


class AnalysisMetadata(CamelModel):
    analysis_version: str
    tokens_used: int
    duration_ms: int


class StrategicAnalysis(CamelModel):
    """The full report for one case, as persisted and returned."""

    case_id: str
    case_number: str
    case_title: str
    analyzed_at: str
    risk_matrix: RiskMatrix
    scenarios: list[StrategicScenario] = Field(..., min_length=3, max_length=3)
    jurisprudence: list[Jurisprudence] = Field(..., min_length=2, max_length=5)
    timeline: StrategicTimeline
    recommendations: StrategicRecommendations
    metadata: AnalysisMetadata


class AnalyzeParams(CamelModel):
    """Case facts every stage works from. description must be non-empty."""

    case_id: str
    case_number: str = ""
    case_title: str = ""
    case_type: str = ""
    description: str
    filing_date: str | None = None
    jurisdiction: str | None = None
    court_name: str | None = None
    estimated_value: float | None = None
