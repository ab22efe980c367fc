# tests/unit/test_schemas.py
"""Unit tests for analysis schemas: shape limits, camelCase wire format, score buckets."""

import pytest
from pydantic import ValidationError

from conftest import RISK_PAYLOAD, SCENARIOS_PAYLOAD, _scenario
from lexia.estratega.schemas import (
    AnalyzeParams,
    Jurisprudence,
    RiskMatrix,
    ScenarioSet,
    TimelineDraft,
    level_for_score,
)


class TestLevelForScore:
    @pytest.mark.parametrize(
        "score,level",
        [
            (0, "low"),
            (3, "low"),
            (3.9, "low"),
            (4, "medium"),
            (6, "medium"),
            (7, "high"),
            (8.5, "high"),
            (9, "critical"),
            (10, "critical"),
        ],
    )
    def test_buckets(self, score, level):
        """Scores map to the 0-3/4-6/7-8/9-10 bands."""
        assert level_for_score(score) == level


class TestRiskMatrix:
    def test_accepts_camel_case(self):
        matrix = RiskMatrix(**RISK_PAYLOAD)
        assert matrix.overall_score == 6.5
        assert matrix.risk_level == "medium"
        assert len(matrix.factors) == 3

    def test_too_few_factors_rejected(self):
        payload = {**RISK_PAYLOAD, "factors": RISK_PAYLOAD["factors"][:2]}
        with pytest.raises(ValidationError):
            RiskMatrix(**payload)

    def test_score_out_of_range_rejected(self):
        factors = [dict(f) for f in RISK_PAYLOAD["factors"]]
        factors[0]["score"] = 11
        with pytest.raises(ValidationError):
            RiskMatrix(**{**RISK_PAYLOAD, "factors": factors})

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            RiskMatrix(**{**RISK_PAYLOAD, "riskLevel": "extreme"})

    def test_wire_format_is_camel_case(self):
        wire = RiskMatrix(**RISK_PAYLOAD).to_wire()
        assert "overallScore" in wire
        assert "riskLevel" in wire
        assert "overall_score" not in wire


class TestJurisprudence:
    def test_optional_fields_omitted_on_wire(self):
        entry = Jurisprudence(
            title="A c/ B",
            court="TSJ",
            date="2020",
            summary="s",
            relevance="r",
            key_arguments=["x"],
        )
        wire = entry.to_wire()
        assert "url" not in wire
        assert "indemnizationAmount" not in wire
        assert wire["keyArguments"] == ["x"]

    def test_key_arguments_required(self):
        with pytest.raises(ValidationError):
            Jurisprudence(title="t", court="c", date="d", summary="s", relevance="r", key_arguments=[])


class TestScenarioSet:
    def test_sorted_into_fixed_order(self):
        """Scenarios come back conservative, moderate, aggressive whatever the model order."""
        shuffled = list(reversed(SCENARIOS_PAYLOAD["scenarios"]))
        result = ScenarioSet(scenarios=shuffled)
        assert [s.type for s in result.scenarios] == ["conservative", "moderate", "aggressive"]

    def test_duplicate_type_rejected(self):
        scenarios = [
            _scenario("conservative", "A", 80, 3),
            _scenario("conservative", "B", 70, 6),
            _scenario("aggressive", "C", 50, 24),
        ]
        with pytest.raises(ValidationError, match="exactly one of each"):
            ScenarioSet(scenarios=scenarios)

    def test_wrong_count_rejected(self):
        with pytest.raises(ValidationError):
            ScenarioSet(scenarios=SCENARIOS_PAYLOAD["scenarios"][:2])

    def test_duration_below_one_month_rejected(self):
        scenarios = [dict(s) for s in SCENARIOS_PAYLOAD["scenarios"]]
        scenarios[0]["estimatedDurationMonths"] = 0
        with pytest.raises(ValidationError):
            ScenarioSet(scenarios=scenarios)


class TestTimelineDraft:
    def _milestone(self, i: int, offset: int = 0) -> dict:
        return {
            "id": f"m{i}",
            "title": "t",
            "description": "d",
            "phase": "preparation",
            "offsetDays": offset,
        }

    def test_negative_offset_rejected(self):
        milestones = [self._milestone(i) for i in range(4)]
        milestones[0]["offsetDays"] = -1
        with pytest.raises(ValidationError):
            TimelineDraft(milestones=milestones, totalEstimatedMonths=3)

    def test_milestone_count_bounds(self):
        with pytest.raises(ValidationError):
            TimelineDraft(milestones=[self._milestone(i) for i in range(3)], totalEstimatedMonths=3)
        with pytest.raises(ValidationError):
            TimelineDraft(milestones=[self._milestone(i) for i in range(17)], totalEstimatedMonths=3)

    def test_defaults(self):
        draft = TimelineDraft(milestones=[self._milestone(i) for i in range(4)], totalEstimatedMonths=3)
        assert draft.critical_path == []
        assert draft.milestones[0].dependencies == []
        assert draft.milestones[0].is_critical is False


class TestAnalyzeParams:
    def test_snake_and_camel_input(self):
        a = AnalyzeParams(case_id="c", description="d", estimated_value=10)
        b = AnalyzeParams(caseId="c", description="d", estimatedValue=10)
        assert a == b
