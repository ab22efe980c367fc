# lexia/api/routes/draft.py
"""Streaming document drafting endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from lexia.api.dependencies import get_current_user_id, get_services
from lexia.errors import InvalidRequestError, LexiaError
from lexia.tools.draft_document import draft_document
from lexia.tools.services import Services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lexia", tags=["draft"])


@router.post("/draft")
async def draft(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    """
    Stream a document draft as text/plain.

    Usage and activity are recorded in a background task after the body
    has been sent.
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequestError("Invalid JSON body")

    try:
        prepared = await draft_document(user_id, body, services)
    except LexiaError:
        raise
    except Exception as e:
        logger.error(f"Draft request failed: {e}", exc_info=True)
        return JSONResponse(
            {"error": "Error processing request", "details": str(e)}, status_code=500
        )

    return StreamingResponse(
        prepared.stream.chunks,
        media_type=prepared.media_type,
        background=BackgroundTask(prepared.finish),
    )
