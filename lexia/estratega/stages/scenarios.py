# lexia/estratega/stages/scenarios.py
"""
Scenario stage: the three fixed strategic archetypes, informed by the risk matrix.
"""

from typing import Any

from lexia.estratega.prompts import load_prompt
from lexia.estratega.schemas import AnalyzeParams, RiskMatrix, ScenarioSet
from lexia.estratega.stages.base import (
    AnalysisStage,
    case_lines,
    extract_json,
    format_number,
)

_SCHEMA = """{
  "scenarios": [
    {
      "type": "conservative|moderate|aggressive",
      "name": "Nombre del escenario",
      "successProbability": 65,
      "estimatedDurationMonths": 12,
      "estimatedCostRange": {"min": 500000, "max": 900000},
      "pros": ["ventaja"],
      "cons": ["desventaja"],
      "recommendedActions": [
        {"action": "Acción concreta", "timeframe": "Primeras 2 semanas", "priority": "high|medium|low"}
      ],
      "description": "Descripción de la estrategia"
    }
  ]
}"""


class ScenarioStage(AnalysisStage):
    """
    Requires inputs["risk_matrix"]. The three archetypes are fixed in the
    prompt; ScenarioSet enforces one of each and returns them in order.
    """

    schema_json = _SCHEMA

    @property
    def name(self) -> str:
        return "scenarios"

    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        matrix: RiskMatrix = inputs["risk_matrix"]
        prompt = load_prompt("scenarios").format(
            case_block=case_lines(
                params,
                "case_number",
                "case_title",
                "case_type",
                "description",
                "estimated_value",
                "jurisdiction",
            ),
            overall_score=format_number(matrix.overall_score),
            risk_level=matrix.risk_level,
            top_risks=", ".join(f.name for f in matrix.factors[:3]),
        )
        return self._make_messages(prompt)

    def parse_output(self, raw_output: str) -> ScenarioSet:
        return ScenarioSet(**extract_json(raw_output))

    def finalize(self, parsed: ScenarioSet, params: AnalyzeParams, inputs: dict[str, Any]) -> list:
        return parsed.scenarios
