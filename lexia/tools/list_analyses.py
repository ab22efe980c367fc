# lexia/tools/list_analyses.py
"""list_analyses tool implementation."""

import logging

from lexia.errors import PermissionDeniedError
from lexia.models.responses import AnalysisSummary, ListAnalysesResponse

from .services import Services

logger = logging.getLogger(__name__)

LIST_LIMIT = 20


async def list_analyses(user_id: str, case_id: str | None, services: Services) -> dict:
    """
    List stored analyses, newest first (at most 20).

    Args:
        user_id: Authenticated caller
        case_id: Restrict to one case (caller must be able to view it);
            without it, the caller's own analyses are listed

    Returns:
        ListAnalysesResponse as dict

    Raises:
        PermissionDeniedError: If case_id is given and not viewable
    """
    if case_id:
        if not await services.permissions.check(user_id, case_id, "can_view"):
            raise PermissionDeniedError()

    rows = await services.store.list_analyses(user_id, case_id=case_id or None, limit=LIST_LIMIT)
    logger.info(f"Listed {len(rows)} analyses for user {user_id} (case={case_id})")

    response = ListAnalysesResponse(analyses=[AnalysisSummary(**row) for row in rows])
    return response.model_dump()
