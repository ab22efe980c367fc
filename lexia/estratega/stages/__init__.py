# lexia/estratega/stages/__init__.py
"""Analysis stages, one structured model call each."""

from lexia.estratega.stages.base import (
    SYSTEM_PROMPT,
    AnalysisStage,
    StageResult,
    extract_json,
)
from lexia.estratega.stages.jurisprudence import JurisprudenceStage
from lexia.estratega.stages.recommendations import RecommendationStage
from lexia.estratega.stages.risk import RiskStage
from lexia.estratega.stages.scenarios import ScenarioStage
from lexia.estratega.stages.timeline import (
    TimelineStage,
    build_timeline,
    resolve_start_date,
    sanitize_dependencies,
)

__all__ = [
    "SYSTEM_PROMPT",
    "AnalysisStage",
    "StageResult",
    "extract_json",
    "RiskStage",
    "JurisprudenceStage",
    "ScenarioStage",
    "TimelineStage",
    "RecommendationStage",
    "build_timeline",
    "resolve_start_date",
    "sanitize_dependencies",
]
