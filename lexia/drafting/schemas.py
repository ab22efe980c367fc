# lexia/drafting/schemas.py
"""
Document types, their form fields and form validation.

Each document type has a default field list. A stored template may carry a
structure schema that either reorders the defaults ({"fields": ["key", ...]})
or replaces them ({"fields": [{"key": ..., "label": ..., ...}, ...]}).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .parties import party_field_keys, validate_party

logger = logging.getLogger(__name__)

DOCUMENT_TYPES: tuple[str, ...] = (
    "demanda",
    "contestacion",
    "apelacion",
    "casacion",
    "recurso_extraordinario",
    "contrato",
    "carta_documento",
    "mediacion",
    "oficio_judicial",
)

REQUIRED_MESSAGE = "Requerido"
NOT_TEXT_MESSAGE = "Debe ser texto"


class FieldDefinition(BaseModel):
    """One form field."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    key: str
    label: str = ""
    type: Literal["text", "textarea", "party", "checkbox"] = "text"
    required: bool = False
    placeholder: str | None = None
    party_prefix: str | None = Field(default=None, alias="partyPrefix")
    party_label: str | None = Field(default=None, alias="partyLabel")

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_type_is_text(cls, value: Any) -> str:
        return value if value in ("text", "textarea", "party", "checkbox") else "text"


def _party(prefix: str, label: str) -> FieldDefinition:
    return FieldDefinition(
        key=prefix, label=label, type="party", party_prefix=prefix, party_label=label.split(" (")[0]
    )


def _text(key: str, label: str, required: bool, placeholder: str | None = None, textarea: bool = True) -> FieldDefinition:
    return FieldDefinition(
        key=key,
        label=label,
        type="textarea" if textarea else "text",
        required=required,
        placeholder=placeholder,
    )


DOCUMENT_FIELDS: dict[str, list[FieldDefinition]] = {
    "demanda": [
        _party("actor", "Actor (demandante)"),
        _party("demandado", "Demandado"),
        _text("hechos", "Hechos", True, "Narración cronológica de los hechos"),
        _text("pretension", "Pretensión", True, "Lo que se solicita al tribunal"),
        _text("fundamento_legal", "Fundamento legal", True, "Normativa y artículos aplicables"),
    ],
    "contestacion": [
        _party("demandante", "Demandante"),
        _party("demandado", "Demandado"),
        _text("hechos_admitidos", "Hechos admitidos", False),
        _text("hechos_negados", "Hechos negados", False),
        _text("defensas", "Defensas de fondo", True),
        _text("excepciones", "Excepciones (si corresponde)", False),
    ],
    "apelacion": [
        _party("recurrente", "Recurrente"),
        _party("recurrido", "Recurrido"),
        _text("resolucion_impugnada", "Resolución impugnada", True, "Fecha, contenido y fundamentos"),
        _text("agravios", "Agravios", True, "Motivos específicos de la impugnación"),
        _text("fundamento", "Fundamento legal", True),
    ],
    "casacion": [
        _party("recurrente", "Recurrente"),
        _party("recurrido", "Recurrido"),
        _text("jurisprudencia_arbitraria", "Jurisprudencia arbitraria", True, "Fundamentación de la infringencia"),
        _text("agravios", "Agravios", True),
    ],
    "recurso_extraordinario": [
        _party("recurrente", "Recurrente"),
        _party("recurrido", "Recurrido"),
        _text("federalidad", "Cuestión federal", True),
        _text("gravedad_institucional", "Gravedad institucional", True),
    ],
    "contrato": [
        _text("partes", "Partes contratantes", True, "Datos de cada parte"),
        _text("objeto", "Objeto del contrato", True),
        _text("obligaciones", "Obligaciones de cada parte", True),
        _text("plazo", "Plazo o duración", False, textarea=False),
        _text("clausulas_especiales", "Cláusulas especiales", False),
    ],
    "carta_documento": [
        _party("remitente", "Remitente"),
        _party("destinatario", "Destinatario"),
        _text("tipo_notificacion", "Tipo de notificación", True, "Ej: intimo, notificación, etc.", textarea=False),
        _text("contenido", "Contenido", True, "Texto del comunicado"),
    ],
    "mediacion": [
        _text("partes", "Partes", True, "Datos de las partes en conflicto"),
        _text("objeto_mediacion", "Objeto de la mediación", True),
        _text("propuesta", "Propuesta o solicitud", True),
    ],
    "oficio_judicial": [
        _text("tribunal", "Tribunal", True, "Datos del tribunal", textarea=False),
        _party("destinatario", "Destinatario"),
        _text("objeto", "Objeto del oficio", True),
        _text("fundamento", "Fundamento", True),
    ],
}


@dataclass
class ValidationResult:
    success: bool
    data: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


def is_document_type(value: Any) -> bool:
    return isinstance(value, str) and value in DOCUMENT_TYPES


def sanitize_structure_schema(structure: Any) -> dict[str, Any] | None:
    """Keep a template structure schema only when it has a "fields" list."""
    if isinstance(structure, dict) and isinstance(structure.get("fields"), list):
        return structure
    return None


def _is_full_structure(structure: dict[str, Any]) -> bool:
    fields = structure.get("fields") or []
    return bool(fields) and isinstance(fields[0], dict) and "key" in fields[0]


def fields_for_document_type(
    document_type: str, structure: dict[str, Any] | None = None
) -> list[FieldDefinition]:
    """
    The form fields for a document type.

    Without a structure schema: the defaults. With a key list: those keys
    first in the given order, then the remaining defaults. With field
    definitions: exactly those definitions.
    """
    defaults = DOCUMENT_FIELDS[document_type]
    if not structure or not structure.get("fields"):
        return list(defaults)

    if _is_full_structure(structure):
        resolved = []
        for raw in structure["fields"]:
            if not isinstance(raw, dict) or "key" not in raw:
                continue
            try:
                definition = FieldDefinition.model_validate({**raw, "key": str(raw["key"])})
            except ValidationError as e:
                logger.warning(f"Skipping invalid template field {raw.get('key')!r}: {e}")
                continue
            if not definition.label:
                definition.label = definition.key
            resolved.append(definition)
        return resolved

    keys = [k for k in structure["fields"] if isinstance(k, str)]
    by_key = {f.key: f for f in defaults}
    ordered = [by_key[k] for k in keys if k in by_key]
    remaining = [f for f in defaults if f.key not in set(keys)]
    return ordered + remaining


def _coerce(value: Any) -> str | None:
    """Form values are text; scalars are stringified, containers rejected."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def validate_form_data(
    document_type: str,
    form_data: dict[str, Any],
    structure: dict[str, Any] | None = None,
) -> ValidationResult:
    """
    Validate form data for a document type.

    Unknown keys are dropped. Required fields must be non-empty. Without a
    structure schema the per-party rules also apply. Errors map each field
    key to its first message.
    """
    fields = fields_for_document_type(document_type, structure)
    use_party_rules = not (structure and structure.get("fields"))

    data: dict[str, str] = {}
    errors: dict[str, str] = {}
    prefixes: list[str] = []

    def add_error(key: str, message: str) -> None:
        errors.setdefault(key, message)

    for definition in fields:
        if definition.type == "party" and definition.party_prefix:
            prefixes.append(definition.party_prefix)
            keys = party_field_keys(definition.party_prefix)
            required = False
        elif definition.type == "party":
            # A party without a prefix has no inputs of its own
            continue
        else:
            keys = [definition.key]
            required = definition.required and definition.type != "checkbox"

        for key in keys:
            raw = form_data.get(key)
            if raw is None:
                if required:
                    add_error(key, REQUIRED_MESSAGE)
                continue
            value = _coerce(raw)
            if value is None:
                add_error(key, NOT_TEXT_MESSAGE)
                continue
            if required and not value:
                add_error(key, REQUIRED_MESSAGE)
                continue
            data[key] = value

    if use_party_rules:
        for prefix in prefixes:
            for key, message in validate_party(data, prefix).items():
                add_error(key, message)

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=data)
