# lexia/estratega/stages/jurisprudence.py
"""
Jurisprudence stage: illustrative precedents for the case.

The model generates plausible examples; nothing is looked up in a real
case-law database.
"""

from typing import Any

from lexia.estratega.prompts import load_prompt
from lexia.estratega.schemas import AnalyzeParams, JurisprudenceResults
from lexia.estratega.stages.base import AnalysisStage, case_lines, extract_json

_SCHEMA = """{
  "results": [
    {
      "title": "Carátula del fallo",
      "court": "Tribunal",
      "date": "Fecha aproximada",
      "summary": "Resumen del fallo",
      "relevance": "Por qué es relevante para el caso",
      "keyArguments": ["argumento clave"],
      "url": "opcional",
      "indemnizationAmount": "opcional, monto de referencia"
    }
  ]
}"""


class JurisprudenceStage(AnalysisStage):
    schema_json = _SCHEMA

    @property
    def name(self) -> str:
        return "jurisprudence"

    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        prompt = load_prompt("jurisprudence").format(
            case_block=case_lines(params, "case_type", "description", "jurisdiction")
        )
        return self._make_messages(prompt)

    def parse_output(self, raw_output: str) -> JurisprudenceResults:
        return JurisprudenceResults(**extract_json(raw_output))

    def finalize(self, parsed: JurisprudenceResults, params: AnalyzeParams, inputs: dict[str, Any]) -> list:
        return parsed.results
