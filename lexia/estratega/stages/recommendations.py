# lexia/estratega/stages/recommendations.py
"""
Recommendations stage: the final strategy pick and next steps.
"""

from typing import Any

from lexia.estratega.prompts import load_prompt
from lexia.estratega.schemas import (
    AnalyzeParams,
    RiskMatrix,
    StrategicRecommendations,
    StrategicScenario,
)
from lexia.estratega.stages.base import AnalysisStage, extract_json, format_number

_SCHEMA = """{
  "primaryStrategy": "conservative|moderate|aggressive",
  "reasoning": "Razonamiento de 2-3 párrafos",
  "nextSteps": ["próximo paso concreto"]
}"""


class RecommendationStage(AnalysisStage):
    """Requires inputs["risk_matrix"], inputs["scenarios"] and inputs["jurisprudence"]."""

    schema_json = _SCHEMA

    @property
    def name(self) -> str:
        return "recommendations"

    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        matrix: RiskMatrix = inputs["risk_matrix"]
        scenarios: list[StrategicScenario] = inputs["scenarios"]
        scenario_lines = "\n".join(
            f"- {s.name}: {format_number(s.success_probability)}% éxito, "
            f"{format_number(s.estimated_duration_months)} meses"
            for s in scenarios
        )
        prompt = load_prompt("recommendations").format(
            case_title=params.case_title,
            case_type=params.case_type,
            risk_level=matrix.risk_level,
            overall_score=format_number(matrix.overall_score),
            scenario_lines=scenario_lines,
            jurisprudence_count=len(inputs.get("jurisprudence", [])),
        )
        return self._make_messages(prompt)

    def parse_output(self, raw_output: str) -> StrategicRecommendations:
        return StrategicRecommendations(**extract_json(raw_output))
