# lexia/estratega/stages/risk.py
"""
Risk analysis stage: score the case's risk factors.
"""

import logging
from typing import Any

from lexia.estratega.prompts import load_prompt
from lexia.estratega.schemas import AnalyzeParams, RiskMatrix, level_for_score
from lexia.estratega.stages.base import AnalysisStage, case_lines, extract_json

logger = logging.getLogger(__name__)

_SCHEMA = """{
  "factors": [
    {
      "id": "r1",
      "name": "Nombre corto del riesgo",
      "description": "Qué puede salir mal en este caso",
      "score": 6,
      "level": "low|medium|high|critical",
      "category": "probatorio|procesal|económico|temporal|normativo|estratégico|reputacional",
      "mitigation": "Acción concreta de mitigación"
    }
  ],
  "overallScore": 5.5,
  "riskLevel": "low|medium|high|critical",
  "summary": "Resumen del perfil de riesgo del caso",
  "recommendations": ["recomendación accionable"]
}"""


class RiskStage(AnalysisStage):
    """Builds the risk matrix from the case facts alone."""

    schema_json = _SCHEMA

    @property
    def name(self) -> str:
        return "risk"

    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        prompt = load_prompt("risk").format(
            case_block=case_lines(
                params,
                "case_number",
                "case_title",
                "case_type",
                "description",
                "filing_date",
                "jurisdiction",
                "court_name",
                "estimated_value",
            )
        )
        return self._make_messages(prompt)

    def parse_output(self, raw_output: str) -> RiskMatrix:
        data = extract_json(raw_output)
        return RiskMatrix(**data)

    def finalize(self, parsed: RiskMatrix, params: AnalyzeParams, inputs: dict[str, Any]) -> RiskMatrix:
        """Re-derive every level from its score; the score is authoritative."""
        for factor in parsed.factors:
            derived = level_for_score(factor.score)
            if derived != factor.level:
                logger.warning(
                    f"Risk factor '{factor.id}': level '{factor.level}' disagrees with "
                    f"score {factor.score}, using '{derived}'"
                )
                factor.level = derived

        derived = level_for_score(parsed.overall_score)
        if derived != parsed.risk_level:
            logger.warning(
                f"Risk matrix: level '{parsed.risk_level}' disagrees with "
                f"overall score {parsed.overall_score}, using '{derived}'"
            )
            parsed.risk_level = derived
        return parsed
