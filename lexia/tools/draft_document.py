# lexia/tools/draft_document.py
"""
draft_document tool implementation.

Validates a drafting request and opens the text stream. Usage and activity
are recorded by PreparedDraft.finish once the stream has been consumed.
"""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lexia.drafting import (
    DraftStream,
    build_draft_prompt,
    build_draft_user_message,
    is_document_type,
    normalize_form_data,
    open_draft_stream,
    resolve_template_content,
    sanitize_structure_schema,
    static_stream,
    validate_form_data,
)
from lexia.errors import (
    CreditsExhaustedError,
    InvalidRequestError,
    PermissionDeniedError,
    RateLimitExceededError,
)
from lexia.models.records import ActivityEntry
from lexia.usage.credits import credits_for_intent

from .services import Services

logger = logging.getLogger(__name__)

DRAFT_INTENT = "document_drafting"
_BASE36 = string.digits + string.ascii_lowercase


class CaseContext(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    case_id: str | None = Field(default=None, alias="caseId")
    case_number: str = Field(default="", alias="caseNumber")
    title: str = ""
    type: str | None = None


class DraftRequest(BaseModel):
    """Body of a drafting request (camelCase on the wire)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    document_type: Any = Field(default=None, alias="documentType")
    variant: str = ""
    form_data: dict[str, Any] = Field(default_factory=dict, alias="formData")
    case_context: CaseContext | None = Field(default=None, alias="caseContext")
    previous_draft: str | None = Field(default=None, alias="previousDraft")
    iteration_instruction: str | None = Field(default=None, alias="iterationInstruction")
    demanda_context: str | None = Field(default=None, alias="demandaContext")


def generate_trace_id() -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"draft-{int(time.time() * 1000)}-{suffix}"


@dataclass
class PreparedDraft:
    """An open draft stream and the bookkeeping to run after it is sent."""

    stream: DraftStream
    user_id: str
    document_type: str
    case_id: str | None
    services: Services
    started_at: float
    static: bool = False

    media_type = "text/plain; charset=utf-8"

    async def finish(self) -> None:
        """Record usage and activity. Failures are logged, never raised."""
        if self.static:
            return

        duration_ms = int((time.monotonic() - self.started_at) * 1000)
        tokens = self.stream.usage.total_tokens

        try:
            await self.services.usage.record_usage(
                self.user_id,
                generate_trace_id(),
                DRAFT_INTENT,
                credits_for_intent(DRAFT_INTENT),
                tokens,
            )
        except Exception as e:
            logger.error(f"Failed to record draft usage for {self.user_id}: {e}")

        via = f"{self.stream.model} fallback" if self.stream.used_fallback else self.stream.model
        try:
            await self.services.store.log_activity(
                ActivityEntry(
                    user_id=self.user_id,
                    case_id=self.case_id,
                    action_type="lexia_query",
                    entity_type="case" if self.case_id else "general",
                    entity_id=self.case_id or "general",
                    description=f"Lexia Draft [{self.document_type}] via {via} ({duration_ms}ms)",
                )
            )
        except Exception as e:
            logger.error(f"Failed to log draft activity for {self.user_id}: {e}")


def parse_draft_request(body: Any) -> DraftRequest:
    if not isinstance(body, dict):
        raise InvalidRequestError("Invalid request body")
    try:
        return DraftRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid request body: {e.errors()[0]['msg']}")


async def draft_document(user_id: str, body: Any, services: Services) -> PreparedDraft:
    """
    Prepare a streamed document draft.

    Order of checks: rate limit, document type, credits (when enforced),
    case access (when caseContext.caseId is given), template lookup, form
    validation. A carta_documento is returned verbatim from its contenido
    without calling a model.

    Args:
        user_id: Authenticated caller
        body: Decoded JSON request body
        services: Shared collaborators

    Returns:
        PreparedDraft whose stream is already primed

    Raises:
        LexiaError: 429/400/402/403 errors
        Exception: Provider failures of the last attempted model
    """
    started_at = time.monotonic()
    config = services.config.drafting

    if not await services.draft_limiter.hit(user_id):
        logger.warning(f"Draft rate limit exceeded for user {user_id}")
        raise RateLimitExceededError(retry_after=int(config.rate_limit.window_seconds))

    request = parse_draft_request(body)
    if not is_document_type(request.document_type):
        raise InvalidRequestError("Invalid documentType")
    document_type: str = request.document_type

    if config.credits_enforcement:
        credits = await services.usage.check_credits_remaining(user_id)
        if not credits.allowed:
            raise CreditsExhaustedError(remaining=0, limit=credits.limit)

    case_id = request.case_context.case_id if request.case_context else None
    if case_id:
        if not await services.permissions.check(user_id, case_id, "can_view"):
            raise PermissionDeniedError("Forbidden: no access to this case")

    profile = await services.store.get_profile(user_id)
    template = await services.store.find_template(
        document_type,
        variant=request.variant,
        organization_id=profile.organization_id if profile else None,
    )
    structure = sanitize_structure_schema(template.structure_schema) if template else None

    validation = validate_form_data(document_type, request.form_data, structure)
    if not validation.success:
        raise InvalidRequestError("Validation failed", errors=validation.errors)

    if document_type == "carta_documento":
        logger.info(f"Carta documento for {user_id}: returning user content")
        return PreparedDraft(
            stream=static_stream(validation.data.get("contenido", "").strip()),
            user_id=user_id,
            document_type=document_type,
            case_id=case_id,
            services=services,
            started_at=started_at,
            static=True,
        )

    form_data = normalize_form_data(validation.data, document_type)
    base_content = resolve_template_content(
        template.template_content if template else None, form_data
    )
    case_context = None
    if request.case_context:
        case_context = {
            "caseNumber": request.case_context.case_number,
            "title": request.case_context.title,
            "type": request.case_context.type or "",
        }

    system_prompt = build_draft_prompt(
        document_type,
        form_data,
        template_fragment=template.system_prompt_fragment if template else None,
        base_content=base_content or None,
        case_context=case_context,
        demanda_context=request.demanda_context,
        previous_draft=request.previous_draft,
        iteration_instruction=request.iteration_instruction,
    )
    messages = [
        {"role": "system", "content": system_prompt},
        {
            "role": "user",
            "content": build_draft_user_message(document_type, request.iteration_instruction),
        },
    ]

    stream = await open_draft_stream(services.resolver, config, document_type, messages)
    return PreparedDraft(
        stream=stream,
        user_id=user_id,
        document_type=document_type,
        case_id=case_id,
        services=services,
        started_at=started_at,
    )
