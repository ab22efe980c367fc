# lexia/estratega/schemas/common.py
"""Shared base model and enumerations for analysis schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RiskLevel = Literal["low", "medium", "high", "critical"]
ScenarioType = Literal["conservative", "moderate", "aggressive"]
TimelinePhase = Literal["preparation", "negotiation", "litigation", "resolution"]
Priority = Literal["high", "medium", "low"]

SCENARIO_ORDER: tuple[str, ...] = ("conservative", "moderate", "aggressive")
PHASE_ORDER: tuple[str, ...] = ("preparation", "negotiation", "litigation", "resolution")


class CamelModel(BaseModel):
    """
    Base for every analysis model.

    Python attributes are snake_case; the wire format (model output, stored
    JSON and HTTP responses) is camelCase. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def level_for_score(score: float) -> str:
    """
    Bucket a 0-10 risk score into a level.

    0-3 low, 4-6 medium, 7-8 high, 9-10 critical; fractional scores fall
    into the bucket of the integer band they lie in (3.5 is low).
    """
    if score < 4:
        return "low"
    if score < 7:
        return "medium"
    if score < 9:
        return "high"
    return "critical"
