# lexia/drafting/__init__.py
"""Legal document drafting: form schemas, prompts and streaming."""

from .parties import normalize_form_data, party_display_name, party_for_prompt, validate_party
from .prompts import (
    TYPE_NAMES,
    build_draft_prompt,
    build_draft_user_message,
    resolve_template_content,
)
from .schemas import (
    DOCUMENT_TYPES,
    FieldDefinition,
    ValidationResult,
    fields_for_document_type,
    is_document_type,
    sanitize_structure_schema,
    validate_form_data,
)
from .streaming import DraftStream, open_draft_stream, static_stream

__all__ = [
    "DOCUMENT_TYPES",
    "FieldDefinition",
    "ValidationResult",
    "fields_for_document_type",
    "is_document_type",
    "sanitize_structure_schema",
    "validate_form_data",
    "normalize_form_data",
    "party_display_name",
    "party_for_prompt",
    "validate_party",
    "TYPE_NAMES",
    "build_draft_prompt",
    "build_draft_user_message",
    "resolve_template_content",
    "DraftStream",
    "open_draft_stream",
    "static_stream",
]
