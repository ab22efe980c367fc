# lexia/drafting/parties.py
"""
Structured party fields (actor, demandado, ...) for document drafting.

A party field with prefix "actor" expands to actor_tipo, actor_nombre, ...
Before prompting, the structured fields of each party are merged into one
legal description under the bare prefix key.
"""

PARTY_SUB_KEYS = (
    "tipo",
    "nombre",
    "apellido",
    "edad",
    "razon_social",
    "documento_tipo",
    "documento",
    "domicilio_real",
    "domicilio_legal",
)

PARTY_TYPES = ("persona_fisica", "persona_juridica")
DOCUMENTO_TIPOS = ("DNI", "PASAPORTE", "CUIT")

PARTY_PREFIXES: dict[str, tuple[str, ...]] = {
    "demanda": ("actor", "demandado"),
    "contestacion": ("demandante", "demandado"),
    "apelacion": ("recurrente", "recurrido"),
    "casacion": ("recurrente", "recurrido"),
    "recurso_extraordinario": ("recurrente", "recurrido"),
    "contrato": (),  # free-text "partes"
    "carta_documento": ("remitente", "destinatario"),
    "mediacion": (),  # free-text "partes"
    "oficio_judicial": ("destinatario",),
}


def party_field_keys(prefix: str) -> list[str]:
    return [f"{prefix}_{sub}" for sub in PARTY_SUB_KEYS]


def party_prefixes(document_type: str) -> list[str]:
    return list(PARTY_PREFIXES.get(document_type, ()))


def _get(form_data: dict[str, str], key: str) -> str:
    return (form_data.get(key) or "").strip()


def validate_party(form_data: dict[str, str], prefix: str) -> dict[str, str]:
    """
    Cross-field rules for one party. Returns field key -> message.

    persona_fisica needs nombre and apellido, persona_juridica needs
    razon_social, and any typed party needs documento and domicilio_real.
    """
    errors: dict[str, str] = {}
    tipo = _get(form_data, f"{prefix}_tipo")

    if tipo == "persona_fisica":
        if not _get(form_data, f"{prefix}_nombre") or not _get(form_data, f"{prefix}_apellido"):
            errors[f"{prefix}_nombre"] = "Nombre y apellido requeridos para persona física"
    elif tipo == "persona_juridica":
        if not _get(form_data, f"{prefix}_razon_social"):
            errors[f"{prefix}_razon_social"] = "Razón social requerida para persona jurídica"

    if tipo:
        if not _get(form_data, f"{prefix}_documento"):
            errors[f"{prefix}_documento"] = "Documento requerido"
        if not _get(form_data, f"{prefix}_domicilio_real"):
            errors[f"{prefix}_domicilio_real"] = "Domicilio real requerido"
    return errors


def party_display_name(form_data: dict[str, str], prefix: str) -> str:
    """Short name for titles: "Juan Pérez" or "Empresa SA"."""
    tipo = _get(form_data, f"{prefix}_tipo")
    if not tipo:
        return ""
    if tipo == "persona_juridica":
        razon = _get(form_data, f"{prefix}_razon_social")
        if razon:
            return razon
    full_name = " ".join(
        part for part in (_get(form_data, f"{prefix}_nombre"), _get(form_data, f"{prefix}_apellido")) if part
    )
    return full_name or _get(form_data, f"{prefix}_razon_social")


def party_for_prompt(form_data: dict[str, str], prefix: str) -> str:
    """Complete legal description of one party, or "" when the party has no type."""
    tipo = _get(form_data, f"{prefix}_tipo")
    if not tipo:
        return ""

    parts: list[str] = []
    if tipo == "persona_fisica":
        full_name = " ".join(
            p for p in (_get(form_data, f"{prefix}_nombre"), _get(form_data, f"{prefix}_apellido")) if p
        )
        if full_name:
            parts.append(full_name)
        edad = _get(form_data, f"{prefix}_edad")
        if edad:
            parts.append(f"Edad: {edad} años")
    else:
        razon = _get(form_data, f"{prefix}_razon_social")
        if razon:
            parts.append(f"Razón social: {razon}")

    doc_tipo = _get(form_data, f"{prefix}_documento_tipo")
    doc = _get(form_data, f"{prefix}_documento")
    if doc_tipo and doc:
        parts.append(f"{doc_tipo}: {doc}")
    elif doc:
        parts.append(f"Documento: {doc}")

    dom_real = _get(form_data, f"{prefix}_domicilio_real")
    if dom_real:
        parts.append(f"Domicilio real: {dom_real}")
    dom_legal = _get(form_data, f"{prefix}_domicilio_legal")
    if dom_legal:
        parts.append(f"Domicilio legal: {dom_legal}")

    return ". ".join(parts)


def normalize_form_data(form_data: dict[str, str], document_type: str) -> dict[str, str]:
    """Replace each party's structured fields with one combined description."""
    prefixes = party_prefixes(document_type)
    result = {
        key: value
        for key, value in form_data.items()
        if not any(key.startswith(f"{p}_") for p in prefixes)
    }
    for prefix in prefixes:
        combined = party_for_prompt(form_data, prefix)
        if combined:
            result[prefix] = combined
    return result
