# lexia/estratega/stages/timeline.py
"""
Timeline stage: milestones for the chosen scenario, dated and grouped by phase.

The model returns relative day offsets; build_timeline() turns them into
calendar dates from the case start date and buckets them into the four
fixed phases.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

from lexia.estratega.prompts import load_prompt
from lexia.estratega.schemas import (
    PHASE_ORDER,
    AnalyzeParams,
    MilestoneDraft,
    StrategicScenario,
    StrategicTimeline,
    TimelineDraft,
    TimelineMilestone,
    TimelinePhaseGroup,
)
from lexia.estratega.stages.base import AnalysisStage, extract_json, format_number

logger = logging.getLogger(__name__)

PHASE_NAMES = {
    "preparation": "Preparación",
    "negotiation": "Negociación",
    "litigation": "Litigio",
    "resolution": "Resolución",
}

_SCHEMA = """{
  "milestones": [
    {
      "id": "m1",
      "title": "Nombre del hito",
      "description": "Acción o evento",
      "phase": "preparation|negotiation|litigation|resolution",
      "offsetDays": 0,
      "isCritical": true,
      "dependencies": ["id de otro hito"],
      "alerts": ["advertencia"]
    }
  ],
  "criticalPath": ["m1"],
  "totalEstimatedMonths": 12,
  "alerts": ["advertencia general"]
}"""


def resolve_start_date(filing_date: str | None, today: date | None = None) -> date:
    """
    Case filing date (YYYY-MM-DD prefix of an ISO string), else today (UTC).
    """
    if filing_date:
        try:
            return date.fromisoformat(filing_date.strip()[:10])
        except ValueError:
            logger.warning(f"Unparsable filing date '{filing_date}', using today")
    return today or datetime.now(timezone.utc).date()


def sanitize_dependencies(milestones: list[MilestoneDraft]) -> dict[str, list[str]]:
    """
    Validate milestone dependencies as a directed graph.

    Drops unknown ids, self references and duplicates, then removes every
    edge that closes a cycle (found by depth-first search in milestone
    order). Returns milestone id -> cleaned dependency list.
    """
    known = {m.id for m in milestones}
    graph: dict[str, list[str]] = {}
    for m in milestones:
        cleaned: list[str] = []
        for dep in m.dependencies:
            if dep in known and dep != m.id and dep not in cleaned:
                cleaned.append(dep)
        if cleaned != m.dependencies:
            removed = [d for d in m.dependencies if d not in cleaned]
            logger.warning(f"Milestone '{m.id}': removed invalid deps {removed}")
        # Duplicate milestone ids keep the first occurrence's edges
        graph.setdefault(m.id, cleaned)

    visiting: set[str] = set()
    done: set[str] = set()

    def visit(node: str) -> None:
        visiting.add(node)
        for dep in list(graph[node]):
            if dep in visiting:
                logger.warning(f"Milestone '{node}': removed cyclic dep '{dep}'")
                graph[node].remove(dep)
            elif dep not in done:
                visit(dep)
        visiting.discard(node)
        done.add(node)

    for node in graph:
        if node not in done:
            visit(node)
    return graph


def milestone_date(start_date: date, offset_days: float) -> str:
    """start_date + offset_days as YYYY-MM-DD; a partial day is truncated."""
    return (start_date + timedelta(days=int(offset_days))).isoformat()


def build_timeline(draft: TimelineDraft, start_date: date) -> StrategicTimeline:
    """
    Convert a model timeline draft into the dated, phase-grouped timeline.

    Each milestone's date is start_date + offsetDays. Phases follow the
    fixed order; phases without milestones are omitted. A phase spans the
    earliest to the latest of its milestone dates.
    """
    dependencies = sanitize_dependencies(draft.milestones)

    dated = [
        TimelineMilestone(
            id=m.id,
            title=m.title,
            description=m.description,
            phase=m.phase,
            estimated_date=milestone_date(start_date, m.offset_days),
            is_critical=m.is_critical,
            dependencies=dependencies.get(m.id, []),
            alerts=m.alerts,
        )
        for m in draft.milestones
    ]

    phases = []
    for phase in PHASE_ORDER:
        members = [m for m in dated if m.phase == phase]
        if not members:
            continue
        # ISO dates sort chronologically as strings
        dates = sorted(m.estimated_date for m in members)
        phases.append(
            TimelinePhaseGroup(
                phase=phase,
                name=PHASE_NAMES[phase],
                start_date=dates[0],
                end_date=dates[-1],
                milestones=members,
            )
        )

    known = {m.id for m in dated}
    critical_path = [mid for mid in draft.critical_path if mid in known]
    if len(critical_path) != len(draft.critical_path):
        dropped = [mid for mid in draft.critical_path if mid not in known]
        logger.warning(f"Critical path: dropped unknown milestone ids {dropped}")

    return StrategicTimeline(
        phases=phases,
        critical_path=critical_path,
        total_estimated_months=draft.total_estimated_months,
        alerts=draft.alerts,
    )


class TimelineStage(AnalysisStage):
    """Requires inputs["scenario"], the scenario to expand into milestones."""

    schema_json = _SCHEMA

    @property
    def name(self) -> str:
        return "timeline"

    def build_prompt(self, params: AnalyzeParams, inputs: dict[str, Any]) -> list[dict]:
        scenario: StrategicScenario = inputs["scenario"]
        jurisdiction_line = (
            f"- Jurisdicción: {params.jurisdiction}\n" if params.jurisdiction else ""
        )
        prompt = load_prompt("timeline").format(
            case_type=params.case_type,
            description=params.description,
            scenario_name=scenario.name,
            scenario_type=scenario.type,
            scenario_months=format_number(scenario.estimated_duration_months),
            jurisdiction_line=jurisdiction_line,
        )
        return self._make_messages(prompt)

    def parse_output(self, raw_output: str) -> TimelineDraft:
        return TimelineDraft(**extract_json(raw_output))

    def finalize(
        self, parsed: TimelineDraft, params: AnalyzeParams, inputs: dict[str, Any]
    ) -> StrategicTimeline:
        start_date = inputs.get("start_date") or resolve_start_date(params.filing_date)
        return build_timeline(parsed, start_date)
