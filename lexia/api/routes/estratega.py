# lexia/api/routes/estratega.py
"""Strategic analysis endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from lexia.api.dependencies import get_current_user_id, get_services
from lexia.models.responses import AnalyzeResponse, GetAnalysisResponse, ListAnalysesResponse
from lexia.tools.analyze_case import analyze_case
from lexia.tools.get_analysis import get_analysis
from lexia.tools.list_analyses import list_analyses
from lexia.tools.services import Services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lexia/estratega", tags=["estratega"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    """Run a full strategic analysis for the case in {"caseId": ...}."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    case_id = body.get("caseId") if isinstance(body, dict) else None
    return await analyze_case(user_id, case_id, services)


@router.get("/analyses", response_model=ListAnalysesResponse)
async def analyses(
    caseId: str | None = None,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    """List up to 20 stored analyses, newest first."""
    return await list_analyses(user_id, caseId, services)


@router.get("/analyses/{analysis_id}", response_model=GetAnalysisResponse)
async def analysis_detail(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    return await get_analysis(user_id, analysis_id, services)
