# lexia/tools/analyze_case.py
"""
analyze_case tool implementation.

Checks access and case data, runs the strategic analysis and stores it.
"""

import logging

from lexia.errors import (
    AnalysisError,
    InvalidRequestError,
    LexiaError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    RateLimitExceededError,
    UnprocessableCaseError,
)
from lexia.estratega import AnalyzeParams, StrategicAnalyzer
from lexia.models.records import ActivityEntry
from lexia.models.responses import AnalyzeResponse

from .services import Services

logger = logging.getLogger(__name__)


async def analyze_case(user_id: str, case_id: str | None, services: Services) -> dict:
    """
    Run a full strategic analysis for one case.

    Checks happen in this order and stop at the first failure: rate limit,
    caseId present, case access, case exists, case has a description. No
    model is called unless all of them pass.

    Args:
        user_id: Authenticated caller
        case_id: Case to analyze
        services: Shared collaborators

    Returns:
        AnalyzeResponse as dict

    Raises:
        LexiaError: One of the 429/400/403/404/422/500 errors
    """
    if not await services.analyze_limiter.hit(user_id):
        logger.warning(f"Analyze rate limit exceeded for user {user_id}")
        raise RateLimitExceededError(
            retry_after=int(services.config.estratega.rate_limit.window_seconds),
            message="Demasiadas solicitudes. Esperá un minuto.",
        )

    if not case_id or not str(case_id).strip():
        raise InvalidRequestError("caseId es requerido")

    if not await services.permissions.check(user_id, case_id, "can_view"):
        raise PermissionDeniedError()

    case = await services.store.get_case(case_id)
    if case is None:
        raise NotFoundError("Caso no encontrado")

    if not (case.description or "").strip():
        raise UnprocessableCaseError("El caso necesita una descripción para poder analizarlo")

    params = AnalyzeParams(
        case_id=case.id,
        case_number=case.case_number,
        case_title=case.title,
        case_type=case.case_type,
        description=case.description,
        filing_date=case.filing_date,
        jurisdiction=case.jurisdiction,
        court_name=case.court_name,
        estimated_value=case.estimated_value,
    )

    analyzer = StrategicAnalyzer(services.resolver, services.config.estratega)
    try:
        analysis = await analyzer.analyze(params)
    except LexiaError:
        raise
    except Exception as e:
        logger.error(f"Analysis of case {case_id} failed: {e}", exc_info=True)
        raise AnalysisError("orchestrator", str(e))

    document = analysis.to_wire()
    try:
        record = await services.store.add_analysis(user_id, case_id, document)
    except Exception as e:
        logger.error(f"Failed to save analysis for case {case_id}: {e}", exc_info=True)
        raise PersistenceError("Error al guardar análisis")

    try:
        await services.store.log_activity(
            ActivityEntry(
                user_id=user_id,
                case_id=case_id,
                action_type="lexia_query",
                entity_type="case",
                entity_id=case_id,
                description=(
                    "Lexia Estratega: Análisis estratégico completo "
                    f"({analysis.metadata.duration_ms}ms)"
                ),
            )
        )
    except Exception as e:
        logger.warning(f"Failed to log activity for analysis {record.id}: {e}")

    return AnalyzeResponse(analysisId=record.id, analysis=document).model_dump()
