# lexia/estratega/orchestrator.py
"""
Strategic analysis orchestrator.

Runs the five stages as a fixed graph with two concurrent joins:

    risk ‖ jurisprudence → scenarios → timeline ‖ recommendations

Any failed stage aborts the whole analysis; there are no retries and no
partial results.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any

from lexia.config.schema import EstrategaConfig
from lexia.errors import AnalysisError
from lexia.estratega.schemas import (
    AnalysisMetadata,
    AnalyzeParams,
    StrategicAnalysis,
    StrategicScenario,
)
from lexia.estratega.stages import (
    JurisprudenceStage,
    RecommendationStage,
    RiskStage,
    ScenarioStage,
    StageResult,
    TimelineStage,
)

logger = logging.getLogger(__name__)


def pick_timeline_scenario(scenarios: list[StrategicScenario]) -> StrategicScenario:
    """The moderate scenario, or the first one if there is none."""
    return next((s for s in scenarios if s.type == "moderate"), scenarios[0])


def _raise_if_failed(*results: StageResult) -> None:
    for result in results:
        if not result.success:
            raise AnalysisError(result.stage_name, result.error or "unknown error")


class StrategicAnalyzer:
    """
    Produces one StrategicAnalysis per call.

    Example:
        analyzer = StrategicAnalyzer(ModelResolver(config.providers), config.estratega)
        analysis = await analyzer.analyze(params)
    """

    def __init__(self, resolver: Any, config: EstrategaConfig | None = None) -> None:
        """
        Args:
            resolver: Object with resolve(model_string) -> (client, model_id)
            config: Stage models, temperatures and version tag
        """
        self.resolver = resolver
        self.config = config or EstrategaConfig()
        self.risk = RiskStage.from_config(self.config.risk)
        self.jurisprudence = JurisprudenceStage.from_config(self.config.jurisprudence)
        self.scenarios = ScenarioStage.from_config(self.config.scenarios)
        self.timeline = TimelineStage.from_config(self.config.timeline)
        self.recommendations = RecommendationStage.from_config(self.config.recommendations)

    async def analyze(self, params: AnalyzeParams) -> StrategicAnalysis:
        """
        Run the full analysis for one case.

        Raises:
            AnalysisError: If any stage fails
        """
        t0 = time.monotonic()
        logger.info(f"Analyzing case {params.case_id}")

        risk_result, juris_result = await asyncio.gather(
            self.risk.execute(self.resolver, params, {}),
            self.jurisprudence.execute(self.resolver, params, {}),
        )
        _raise_if_failed(risk_result, juris_result)
        risk_matrix = risk_result.output
        jurisprudence = juris_result.output

        scenario_result = await self.scenarios.execute(
            self.resolver, params, {"risk_matrix": risk_matrix}
        )
        _raise_if_failed(scenario_result)
        scenarios = scenario_result.output

        timeline_result, recs_result = await asyncio.gather(
            self.timeline.execute(
                self.resolver, params, {"scenario": pick_timeline_scenario(scenarios)}
            ),
            self.recommendations.execute(
                self.resolver,
                params,
                {
                    "risk_matrix": risk_matrix,
                    "scenarios": scenarios,
                    "jurisprudence": jurisprudence,
                },
            ),
        )
        _raise_if_failed(timeline_result, recs_result)

        results = [risk_result, juris_result, scenario_result, timeline_result, recs_result]
        tokens_used = sum(r.tokens_used for r in results)
        duration_ms = int((time.monotonic() - t0) * 1000)

        analysis = StrategicAnalysis(
            case_id=params.case_id,
            case_number=params.case_number,
            case_title=params.case_title,
            analyzed_at=datetime.now(timezone.utc).isoformat(),
            risk_matrix=risk_matrix,
            scenarios=scenarios,
            jurisprudence=jurisprudence,
            timeline=timeline_result.output,
            recommendations=recs_result.output,
            metadata=AnalysisMetadata(
                analysis_version=self.config.analysis_version,
                tokens_used=tokens_used,
                duration_ms=duration_ms,
            ),
        )
        logger.info(
            f"Analysis of case {params.case_id} done: {tokens_used} tokens, {duration_ms}ms"
        )
        return analysis
