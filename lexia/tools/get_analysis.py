# lexia/tools/get_analysis.py
"""get_analysis tool implementation."""

import logging

from lexia.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from lexia.models.responses import AnalysisDetail, GetAnalysisResponse

from .services import Services

logger = logging.getLogger(__name__)


async def get_analysis(user_id: str, analysis_id: str, services: Services) -> dict:
    """
    Fetch one stored analysis.

    The owner can always read it; anyone else needs view access to its case.

    Returns:
        GetAnalysisResponse as dict

    Raises:
        NotFoundError: If no analysis has this id
        PermissionDeniedError: If the caller may not read it
    """
    if not analysis_id or not analysis_id.strip():
        raise InvalidRequestError("El id del análisis es requerido")

    record = await services.store.get_analysis(analysis_id.strip())
    if record is None:
        raise NotFoundError("Análisis no encontrado")

    if record.user_id != user_id:
        allowed = bool(record.case_id) and await services.permissions.check(
            user_id, record.case_id, "can_view"
        )
        if not allowed:
            logger.warning(f"User {user_id} denied access to analysis {record.id}")
            raise PermissionDeniedError()

    detail = AnalysisDetail(
        id=record.id,
        case_id=record.case_id,
        analysis=record.analysis,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
    return GetAnalysisResponse(analysis=detail).model_dump()
