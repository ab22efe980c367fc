# lexia/estratega/schemas/timeline.py
"""
Schemas for the timeline stage.

MilestoneDraft/TimelineDraft are what the model returns (relative day
offsets). TimelineMilestone/StrategicTimeline are the calendar-dated result
after phase grouping.
"""

from pydantic import Field

from .common import CamelModel, TimelinePhase


class MilestoneDraft(CamelModel):
    id: str
    title: str
    description: str
    phase: TimelinePhase
    offset_days: float = Field(..., ge=0, description="Days from the start date (0 = first day)")
    is_critical: bool = False
    dependencies: list[str] = Field(default_factory=list)
    alerts: list[str] = Field(default_factory=list)


class TimelineDraft(CamelModel):
    milestones: list[MilestoneDraft] = Field(..., min_length=4, max_length=16)
    critical_path: list[str] = Field(default_factory=list)
    total_estimated_months: float = Field(..., ge=1)
    alerts: list[str] = Field(default_factory=list)


class TimelineMilestone(CamelModel):
    id: str
    title: str
    description: str
    phase: TimelinePhase
    estimated_date: str = Field(..., description="YYYY-MM-DD")
    is_critical: bool
    dependencies: list[str]
    alerts: list[str]


class TimelinePhaseGroup(CamelModel):
    phase: TimelinePhase
    name: str = Field(..., description="Display name, e.g. Preparación")
    start_date: str
    end_date: str
    milestones: list[TimelineMilestone]


class StrategicTimeline(CamelModel):
    phases: list[TimelinePhaseGroup]
    critical_path: list[str]
    total_estimated_months: float
    alerts: list[str]
