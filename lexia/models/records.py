# lexia/models/records.py
"""
Internal row models (NOT Pydantic - not exposed directly by any surface).
"""

from dataclasses import dataclass
from typing import Any
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


@dataclass
class Profile:
    """A user of the application."""

    id: str
    system_role: str = "lawyer"  # admin_general | client | any team role
    full_name: str | None = None
    email: str | None = None
    organization_id: str | None = None
    lexia_plan_id: str | None = None


@dataclass
class CaseRecord:
    id: str
    case_number: str = ""
    title: str = ""
    case_type: str = ""
    description: str | None = None
    filing_date: str | None = None
    jurisdiction: str | None = None
    court_name: str | None = None
    estimated_value: float | None = None
    organization_id: str | None = None
    company_id: str | None = None


@dataclass
class Plan:
    id: str
    slug: str
    credits_per_month: float


@dataclass
class AnalysisRecord:
    """One stored strategic analysis (analysis is the camelCase JSON document)."""

    id: str
    user_id: str
    case_id: str | None
    analysis: dict[str, Any]
    created_at: str
    updated_at: str


@dataclass
class TemplateRecord:
    id: str
    document_type: str
    variant: str = ""
    organization_id: str | None = None
    system_prompt_fragment: str | None = None
    template_content: str | None = None
    structure_schema: dict[str, Any] | None = None
    is_active: bool = True


@dataclass
class PeriodUsage:
    credits_used: float = 0.0
    tokens_used: int = 0
    requests: int = 0


@dataclass
class ActivityEntry:
    user_id: str
    action_type: str
    entity_type: str
    entity_id: str
    description: str
    case_id: str | None = None
    created_at: str = ""
