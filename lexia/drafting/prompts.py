# lexia/drafting/prompts.py
"""System prompt and user message construction for document drafting."""

import re

DRAFT_BASE = """Eres LEXIA, un asistente legal de inteligencia artificial para un estudio juridico profesional en Cordoba, Argentina.

ROL: REDACCION JURIDICA
- Generas borradores de documentos legales profesionales
- Usas el lenguaje y formalidades del derecho argentino
- Incluyes todas las secciones y requisitos formales
- Citas correctamente articulos del CPCC Cordoba (Ley 8465)
- Formato del Poder Judicial de Cordoba

JURISDICCION: Cordoba, Argentina
FORMATO: Espanol formal, estructura procesal argentina

Al final incluye: "Esta informacion es orientativa. Verifique con la normativa vigente y el tribunal correspondiente.\""""

TYPE_STRUCTURE: dict[str, str] = {
    "demanda": """DEMANDA - ESTRUCTURA REQUERIDA:
- Encabezado: Tribunal, expediente (si aplica), tipo de escrito
- PARTE ACTORA: datos completos (nombre, domicilio, CUIT/DNI)
- PARTE DEMANDADA: datos completos
- HECHOS: numerados, orden cronologico
- FUNDAMENTOS: citar articulos y normativa aplicable
- PETITORIO: pretensiones claras
- FIRMA Y ACREDITACION""",
    "contestacion": """CONTESTACION DE DEMANDA - ESTRUCTURA:
- Encabezado
- PARTE DEMANDANTE y PARTE DEMANDADA
- HECHOS ADMITIDOS (numerados)
- HECHOS NEGADOS (numerados)
- DEFENSAS DE FONDO
- EXCEPCIONES (si corresponde)
- PETITORIO""",
    "apelacion": """RECURSO DE APELACION - ESTRUCTURA:
- Encabezado
- PARTE RECURRENTE y RECURRIDA
- RESOLUCION IMPUGNADA (fecha, contenido, fundamentos)
- AGRAVIOS (motivos especificos)
- FUNDAMENTOS LEGALES
- PETITORIO (solicitar revocacion o reforma)""",
    "casacion": """RECURSO DE CASACION - ESTRUCTURA:
- Encabezado
- PARTE RECURRENTE y RECURRIDA
- Fundamentacion de la infringencia (jurisprudencia arbitraria)
- AGRAVIOS especificos
- PETITORIO""",
    "recurso_extraordinario": """RECURSO EXTRAORDINARIO - ESTRUCTURA:
- Encabezado
- Cuestión federal o gravedad institucional
- AGRAVIOS
- PETITORIO""",
    "contrato": """CONTRATO - ESTRUCTURA:
- ANTECEDENTES
- PARTES CONTRATANTES (datos completos)
- OBJETO
- OBLIGACIONES DE CADA PARTE
- PLAZO (si aplica)
- CLAUSULAS ESPECIALES
- FIRMAS""",
    "carta_documento": """CARTA DOCUMENTO - ESTRUCTURA:
- Datos del remitente y destinatario
- TIPO DE NOTIFICACION
- CONTENIDO del comunicado
- Fecha y firma""",
    "mediacion": """ESCRITO DE MEDIACION - ESTRUCTURA:
- PARTES (datos completos)
- OBJETO de la mediacion
- PROPUESTA o solicitud
- PETITORIO""",
    "oficio_judicial": """OFICIO JUDICIAL - ESTRUCTURA:
- Encabezado (Tribunal, expediente)
- DESTINATARIO
- OBJETO del oficio
- FUNDAMENTO
- PETITORIO
- Firma y sellos""",
}

TYPE_NAMES: dict[str, str] = {
    "demanda": "Demanda",
    "contestacion": "Contestación de demanda",
    "apelacion": "Recurso de apelación",
    "casacion": "Recurso de casación",
    "recurso_extraordinario": "Recurso extraordinario",
    "contrato": "Contrato",
    "carta_documento": "Carta documento",
    "mediacion": "Escrito de mediación",
    "oficio_judicial": "Oficio judicial",
}

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def resolve_template_content(template_content: str | None, form_data: dict[str, str]) -> str:
    """Replace {{key}} placeholders with form values (missing keys become "")."""
    if not template_content or not template_content.strip():
        return ""
    return _PLACEHOLDER.sub(lambda m: form_data.get(m.group(1), ""), template_content)


def humanize_key(key: str) -> str:
    """fundamento_legal -> Fundamento Legal"""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("_", " "))


def build_draft_prompt(
    document_type: str,
    form_data: dict[str, str],
    template_fragment: str | None = None,
    base_content: str | None = None,
    case_context: dict[str, str] | None = None,
    demanda_context: str | None = None,
    previous_draft: str | None = None,
    iteration_instruction: str | None = None,
) -> str:
    """
    Build the full system prompt for one drafting request.

    Sections in order: base role, document structure, template
    instructions, template base content, user data, case context,
    originating demanda (for contestaciones), then either the iteration
    block or the fresh-generation instruction.
    """
    prompt = f"{DRAFT_BASE}\n\n"
    prompt += f"--- ESTRUCTURA DEL DOCUMENTO ---\n{TYPE_STRUCTURE[document_type]}\n\n"

    if template_fragment:
        prompt += f"--- INSTRUCCIONES ESPECIFICAS ---\n{template_fragment}\n\n"

    if base_content and base_content.strip():
        prompt += f"--- CONTENIDO BASE DEL DOCUMENTO ---\n{base_content.strip()}\n\n"

    prompt += "--- DATOS PROPORCIONADOS POR EL USUARIO ---\n"
    for key, value in form_data.items():
        if value and value.strip():
            prompt += f"{humanize_key(key)}: {value}\n\n"

    if case_context:
        prompt += "\n--- CONTEXTO DEL CASO ---\n"
        prompt += f"Expediente: {case_context.get('caseNumber', '')}\n"
        prompt += f"Titulo: {case_context.get('title', '')}\n"
        if case_context.get("type"):
            prompt += f"Tipo: {case_context['type']}\n"
        prompt += "\nUsa este contexto para referencias al expediente en el documento.\n\n"

    if demanda_context and demanda_context.strip():
        prompt += f"--- DEMANDA A CONTESTAR ---\n{demanda_context.strip()}\n\n"

    if previous_draft and iteration_instruction:
        prompt += f"--- BORRADOR ANTERIOR (para modificar) ---\n{previous_draft}\n\n"
        prompt += f'--- INSTRUCCION DE MODIFICACION ---\n"{iteration_instruction}"\n\n'
        prompt += (
            "Genera el documento completo modificado segun la instruccion del usuario. "
            "Manten la estructura y formalidad, aplicando los cambios solicitados.\n"
        )
    else:
        prompt += (
            "Genera el documento legal completo basandote en los datos proporcionados. "
            "Usa la estructura indicada. Incluye todos los elementos formales.\n"
        )
    return prompt


def build_draft_user_message(document_type: str, iteration_instruction: str | None = None) -> str:
    if iteration_instruction:
        return (
            "Por favor modifica el borrador anterior segun la siguiente instruccion: "
            f'"{iteration_instruction}"'
        )
    return f"Genera el borrador completo del documento: {TYPE_NAMES[document_type]}."
