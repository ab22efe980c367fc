# lexia/estratega/schemas/scenario.py
"""Schema for scenario generation stage output."""

from pydantic import Field, model_validator

from .common import SCENARIO_ORDER, CamelModel, Priority, ScenarioType


class ScenarioAction(CamelModel):
    action: str
    timeframe: str
    priority: Priority


class CostRange(CamelModel):
    """Estimated cost range in ARS (fees plus procedural expenses)."""

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)


class StrategicScenario(CamelModel):
    """One of the three fixed strategic archetypes for the case."""

    type: ScenarioType
    name: str
    success_probability: float = Field(..., ge=0, le=100)
    estimated_duration_months: float = Field(..., ge=1)
    estimated_cost_range: CostRange
    pros: list[str] = Field(..., min_length=2, max_length=5)
    cons: list[str] = Field(..., min_length=2, max_length=5)
    recommended_actions: list[ScenarioAction] = Field(..., min_length=2, max_length=6)
    description: str


class ScenarioSet(CamelModel):
    """
    Exactly three scenarios, one per type.

    Scenarios are returned in the fixed order conservative, moderate,
    aggressive regardless of the order the model produced them in.
    """

    scenarios: list[StrategicScenario] = Field(..., min_length=3, max_length=3)

    @model_validator(mode="after")
    def _one_per_type(self) -> "ScenarioSet":
        types = [s.type for s in self.scenarios]
        if sorted(types) != sorted(SCENARIO_ORDER):
            raise ValueError(
                f"Scenarios must be exactly one of each of {list(SCENARIO_ORDER)}, got {types}"
            )
        self.scenarios.sort(key=lambda s: SCENARIO_ORDER.index(s.type))
        return self
