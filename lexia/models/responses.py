# lexia/models/responses.py
"""
Pydantic response models for the HTTP API and MCP tool outputs.

Field names are the camelCase keys the web client consumes.
"""

from typing import Any

from pydantic import BaseModel, Field


class AnalyzeResponse(BaseModel):
    """Response from analyze_case."""

    analysisId: str = Field(description="Identifier of the stored analysis")
    analysis: dict[str, Any] = Field(description="The full strategic analysis")


class AnalysisSummary(BaseModel):
    """Projection of one stored analysis (used in list_analyses)."""

    id: str
    case_id: str | None = None
    created_at: str
    updated_at: str
    caseNumber: str | None = None
    caseTitle: str | None = None
    analyzedAt: str | None = None
    riskLevel: str | None = None
    overallScore: float | None = None
    primaryStrategy: str | None = None


class ListAnalysesResponse(BaseModel):
    """Response from list_analyses (newest first, at most 20)."""

    analyses: list[AnalysisSummary] = Field(default_factory=list)


class AnalysisDetail(BaseModel):
    id: str
    case_id: str | None = None
    analysis: dict[str, Any]
    created_at: str
    updated_at: str


class GetAnalysisResponse(BaseModel):
    """Response from get_analysis."""

    analysis: AnalysisDetail


class ErrorResponse(BaseModel):
    error: str
    errors: dict[str, str] | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
