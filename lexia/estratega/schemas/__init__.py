# lexia/estratega/schemas/__init__.py
"""Pydantic schemas for structured output from each analysis stage."""

from lexia.estratega.schemas.analysis import (
    AnalysisMetadata,
    AnalyzeParams,
    StrategicAnalysis,
    StrategicRecommendations,
)
from lexia.estratega.schemas.common import (
    PHASE_ORDER,
    SCENARIO_ORDER,
    CamelModel,
    level_for_score,
)
from lexia.estratega.schemas.jurisprudence import Jurisprudence, JurisprudenceResults
from lexia.estratega.schemas.risk import RiskFactor, RiskMatrix
from lexia.estratega.schemas.scenario import (
    CostRange,
    ScenarioAction,
    ScenarioSet,
    StrategicScenario,
)
from lexia.estratega.schemas.timeline import (
    MilestoneDraft,
    StrategicTimeline,
    TimelineDraft,
    TimelineMilestone,
    TimelinePhaseGroup,
)

__all__ = [
    "CamelModel",
    "level_for_score",
    "PHASE_ORDER",
    "SCENARIO_ORDER",
    "RiskFactor",
    "RiskMatrix",
    "Jurisprudence",
    "JurisprudenceResults",
    "ScenarioAction",
    "CostRange",
    "StrategicScenario",
    "ScenarioSet",
    "MilestoneDraft",
    "TimelineDraft",
    "TimelineMilestone",
    "TimelinePhaseGroup",
    "StrategicTimeline",
    "StrategicRecommendations",
    "AnalysisMetadata",
    "StrategicAnalysis",
    "AnalyzeParams",
]
