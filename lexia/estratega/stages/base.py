# lexia/estratega/stages/base.py
"""
Abstract base class for analysis stages.

Each stage defines its prompt template, response schema and output parsing.
A stage makes exactly one structured-output model call; the orchestrator
decides which stages run concurrently.
"""

import json
import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from lexia.config.schema import StageModelConfig
from lexia.estratega.schemas import AnalyzeParams

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Eres Lexia Estratega, un asistente de estrategia legal para estudios jurídicos "
    "argentinos. Razonas con rigor, usas terminología jurídica argentina y das "
    "recomendaciones específicas y accionables para el caso concreto."
)

JSON_INSTRUCTION = (
    "\n\nResponde ÚNICAMENTE con JSON válido que siga exactamente este esquema, "
    "sin texto adicional ni bloques markdown:\n"
)


def extract_json(raw_output: str) -> dict[str, Any]:
    """
    Extract a JSON object from LLM output, handling common formatting variations.

    Tries multiple extraction strategies:
    1. Direct JSON parse (if output is pure JSON)
    2. Code fence extraction (```json ... ```)
    3. Bare object extraction (first { to last })

    Raises:
        ValueError: If no JSON object is found
    """
    try:
        data = json.loads(raw_output.strip())
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        pass

    fence_match = re.search(
        r"```(?:json)?\s*\n(.*?)\n```", raw_output, re.DOTALL | re.IGNORECASE
    )
    if fence_match:
        try:
            data = json.loads(fence_match.group(1).strip())
            if isinstance(data, dict):
                return data
        except json.JSONDecodeError:
            pass

    json_match = re.search(r"\{.*\}", raw_output, re.DOTALL)
    if json_match:
        try:
            return json.loads(json_match.group(0))
        except json.JSONDecodeError:
            pass

    preview = raw_output[:500].replace("\n", "\\n")
    raise ValueError(
        f"Could not extract valid JSON from output ({len(raw_output)} chars). "
        f"Preview: {preview}"
    )


def format_number(value: float) -> str:
    """Render 150000.0 as '150000' and 1.5 as '1.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)


def case_lines(params: AnalyzeParams, *fields: str) -> str:
    """
    Render the requested case facts as '- Label: value' lines.

    Optional facts that are empty are skipped.
    """
    labels = {
        "case_number": "Número",
        "case_title": "Título",
        "case_type": "Tipo",
        "description": "Descripción",
        "filing_date": "Fecha de inicio",
        "jurisdiction": "Jurisdicción",
        "court_name": "Tribunal",
        "estimated_value": "Valor estimado",
    }
    lines = []
    for field in fields:
        value = getattr(params, field)
        if value is None or value == "":
            continue
        if field == "estimated_value":
            value = f"${format_number(value)}"
        lines.append(f"- {labels[field]}: {value}")
    return "\n".join(lines)


@dataclass
class StageResult:
    """
    Result of executing an analysis stage.

    Attributes:
        stage_name: Name of the stage that produced this result
        success: Whether the stage completed successfully
        output: Validated output model (None on failure)
        raw_output: Raw LLM response text
        tokens_used: Input plus output tokens reported by the provider
        model: Model string the stage ran against
        error: Error message if success=False
    """

    stage_name: str
    success: bool
    output: Any
    raw_output: str
    tokens_used: int = 0
    model: str = ""
    error: str | None = None


class AnalysisStage(ABC):
    """
    Abstract base class for strategic analysis stages.

    Each stage defines:
    1. Prompt construction (from case facts + outputs of earlier stages)
    2. Output parsing (raw LLM response → validated pydantic model)
    3. An optional finalize step (deterministic post-processing)
    """

    schema_json: str = "{}"

    def __init__(self, model: str, temperature: float = 0.3, max_tokens: int = 4096):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: StageModelConfig) -> "AnalysisStage":
        return cls(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage name (used in logging and error reporting)."""

    @abstractmethod
    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        """
        Build the LLM prompt for this stage.

        Args:
            params: Case facts
            inputs: Outputs of earlier stages this stage depends on

        Returns:
            List of message dicts with "role" and "content" keys
        """

    @abstractmethod
    def parse_output(self, raw_output: str) -> BaseModel:
        """
        Parse the raw LLM output into a validated model.

        Raises:
            ValueError: If output cannot be parsed or fails validation
        """

    def finalize(self, parsed: BaseModel, params: AnalyzeParams, inputs: dict[str, Any]) -> Any:
        """Post-process the validated output. Default: return it unchanged."""
        return parsed

    def _make_messages(self, user_content: str) -> list[dict]:
        """Build messages list with system prompt prepended and the schema appended."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_content + JSON_INSTRUCTION + self.schema_json},
        ]

    async def execute(
        self, resolver: Any, params: AnalyzeParams, inputs: dict[str, Any]
    ) -> StageResult:
        """
        Run the stage: one JSON-mode model call, validation, finalize.

        Never raises; failures are reported through StageResult.success.
        """
        raw = ""
        tokens = 0
        try:
            client, model_id = resolver.resolve(self.model)
            messages = self.build_prompt(params, inputs)

            t0 = time.monotonic()
            completion = await client.complete(
                messages,
                model=model_id,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                json_mode=True,
            )
            raw = completion.text
            tokens = completion.total_tokens
            logger.info(
                f"Stage '{self.name}': {self.model} took {time.monotonic() - t0:.1f}s, "
                f"{tokens} tokens"
            )

            parsed = self.parse_output(raw)
            output = self.finalize(parsed, params, inputs)
            return StageResult(
                stage_name=self.name,
                success=True,
                output=output,
                raw_output=raw,
                tokens_used=tokens,
                model=self.model,
            )
        except Exception as e:
            logger.error(f"Stage '{self.name}' failed: {e}", exc_info=True)
            return StageResult(
                stage_name=self.name,
                success=False,
                output=None,
                raw_output=raw,
                tokens_used=tokens,
                model=self.model,
                error=str(e),
            )
