# lexia/models/__init__.py
"""
Data models for lexia.

Provides Pydantic response models, internal row records and the SQLite store.
"""

from lexia.models.records import (
    ActivityEntry,
    AnalysisRecord,
    CaseRecord,
    PeriodUsage,
    Plan,
    Profile,
    TemplateRecord,
    generate_id,
)
from lexia.models.responses import (
    AnalysisDetail,
    AnalysisSummary,
    AnalyzeResponse,
    ErrorResponse,
    GetAnalysisResponse,
    HealthResponse,
    ListAnalysesResponse,
)
from lexia.models.sqlite_store import SQLiteStore

__all__ = [
    # Response models
    "AnalyzeResponse",
    "AnalysisSummary",
    "ListAnalysesResponse",
    "AnalysisDetail",
    "GetAnalysisResponse",
    "ErrorResponse",
    "HealthResponse",
    # Records
    "Profile",
    "CaseRecord",
    "Plan",
    "AnalysisRecord",
    "TemplateRecord",
    "PeriodUsage",
    "ActivityEntry",
    "generate_id",
    # Store
    "SQLiteStore",
]
