# tests/unit/test_drafting.py
"""Unit tests for drafting form schemas, party handling and prompt building."""

import pytest

from lexia.drafting import (
    DOCUMENT_TYPES,
    build_draft_prompt,
    build_draft_user_message,
    fields_for_document_type,
    is_document_type,
    normalize_form_data,
    party_display_name,
    party_for_prompt,
    resolve_template_content,
    sanitize_structure_schema,
    validate_form_data,
    validate_party,
)

DEMANDA_DATA = {
    "actor_tipo": "persona_fisica",
    "actor_nombre": "Juan",
    "actor_apellido": "Pérez",
    "actor_edad": "45",
    "actor_documento_tipo": "DNI",
    "actor_documento": "20123456",
    "actor_domicilio_real": "Av. Colón 100, Córdoba",
    "demandado_tipo": "persona_juridica",
    "demandado_razon_social": "Empresa SA",
    "demandado_documento_tipo": "CUIT",
    "demandado_documento": "30-12345678-9",
    "demandado_domicilio_real": "Bv. San Juan 200",
    "hechos": "El actor fue despedido sin causa",
    "pretension": "Indemnización por despido",
    "fundamento_legal": "Arts. 232, 233 y 245 LCT",
}


class TestDocumentTypes:
    def test_nine_types(self):
        assert len(DOCUMENT_TYPES) == 9
        assert is_document_type("carta_documento")
        assert not is_document_type("testamento")
        assert not is_document_type(None)


class TestFields:
    def test_default_fields(self):
        keys = [f.key for f in fields_for_document_type("demanda")]
        assert keys == ["actor", "demandado", "hechos", "pretension", "fundamento_legal"]

    def test_key_list_reorders(self):
        """A key list puts those keys first and keeps the rest in default order."""
        structure = {"fields": ["fundamento_legal", "hechos", "nope"]}
        keys = [f.key for f in fields_for_document_type("demanda", structure)]
        assert keys == ["fundamento_legal", "hechos", "actor", "demandado", "pretension"]

    def test_field_definitions_replace(self):
        structure = {
            "fields": [
                {"key": "monto", "label": "Monto", "type": "text", "required": True},
                {"key": "urgente", "type": "checkbox"},
            ]
        }
        fields = fields_for_document_type("demanda", structure)
        assert [f.key for f in fields] == ["monto", "urgente"]
        assert fields[1].label == "urgente"

    def test_sanitize_structure_schema(self):
        assert sanitize_structure_schema({"fields": []}) == {"fields": []}
        assert sanitize_structure_schema({"fields": "x"}) is None
        assert sanitize_structure_schema(["fields"]) is None
        assert sanitize_structure_schema(None) is None


class TestValidation:
    def test_valid_demanda(self):
        result = validate_form_data("demanda", {**DEMANDA_DATA, "extra": "dropped"})
        assert result.success
        assert "extra" not in result.data
        assert result.data["hechos"] == DEMANDA_DATA["hechos"]

    def test_required_fields(self):
        data = {**DEMANDA_DATA, "hechos": ""}
        del data["pretension"]
        result = validate_form_data("demanda", data)
        assert not result.success
        assert result.errors == {"hechos": "Requerido", "pretension": "Requerido"}

    def test_optional_fields_may_be_missing(self):
        result = validate_form_data("contestacion", {"defensas": "Niega la relación laboral"})
        assert result.success

    def test_party_rules(self):
        data = {
            **DEMANDA_DATA,
            "actor_apellido": "",
            "demandado_razon_social": "",
            "demandado_domicilio_real": "",
        }
        result = validate_form_data("demanda", data)
        assert result.errors == {
            "actor_nombre": "Nombre y apellido requeridos para persona física",
            "demandado_razon_social": "Razón social requerida para persona jurídica",
            "demandado_domicilio_real": "Domicilio real requerido",
        }

    def test_untyped_party_not_checked(self):
        data = {k: v for k, v in DEMANDA_DATA.items() if not k.startswith("actor_")}
        assert validate_form_data("demanda", data).success

    def test_non_text_value_rejected(self):
        result = validate_form_data("contrato", {"partes": ["a"], "objeto": "o", "obligaciones": "x"})
        assert result.errors == {"partes": "Debe ser texto"}

    def test_structure_schema_fields_validate(self):
        structure = {"fields": [{"key": "monto", "required": True}, {"key": "nota"}]}
        assert validate_form_data("demanda", {"nota": "x"}, structure).errors == {"monto": "Requerido"}
        result = validate_form_data("demanda", {"monto": "100", "hechos": "dropped"}, structure)
        assert result.data == {"monto": "100"}

    def test_structure_schema_skips_party_rules(self):
        """With a structure schema party sub-fields are optional and unchecked."""
        structure = {"fields": ["actor", "hechos"]}
        data = {**DEMANDA_DATA, "actor_nombre": ""}
        assert validate_form_data("demanda", data, structure).success


class TestParties:
    def test_validate_party_documento(self):
        errors = validate_party({"x_tipo": "persona_fisica", "x_nombre": "A", "x_apellido": "B"}, "x")
        assert errors == {"x_documento": "Documento requerido", "x_domicilio_real": "Domicilio real requerido"}

    def test_display_name(self):
        assert party_display_name(DEMANDA_DATA, "actor") == "Juan Pérez"
        assert party_display_name(DEMANDA_DATA, "demandado") == "Empresa SA"
        assert party_display_name({}, "actor") == ""

    def test_prompt_description(self):
        assert party_for_prompt(DEMANDA_DATA, "actor") == (
            "Juan Pérez. Edad: 45 años. DNI: 20123456. Domicilio real: Av. Colón 100, Córdoba"
        )
        assert party_for_prompt(DEMANDA_DATA, "demandado").startswith("Razón social: Empresa SA. CUIT:")

    def test_normalize_merges_parties(self):
        normalized = normalize_form_data(DEMANDA_DATA, "demanda")
        assert not any(k.startswith("actor_") for k in normalized)
        assert normalized["actor"].startswith("Juan Pérez")
        assert normalized["hechos"] == DEMANDA_DATA["hechos"]

    def test_normalize_without_parties(self):
        data = {"partes": "A y B", "objeto": "Locación"}
        assert normalize_form_data(data, "contrato") == data


class TestPrompts:
    def test_template_placeholders(self):
        text = resolve_template_content("Actor: {{actor}}, hechos: {{hechos}} {{faltante}}", {
            "actor": "Juan", "hechos": "despido"
        })
        assert text == "Actor: Juan, hechos: despido "
        assert resolve_template_content("   ", {}) == ""
        assert resolve_template_content(None, {}) == ""

    def test_fresh_prompt_sections(self):
        prompt = build_draft_prompt(
            "demanda",
            {"hechos": "Despido", "fundamento_legal": "LCT", "vacio": " "},
            template_fragment="Usar tono formal",
            base_content="Base {{x}}",
            case_context={"caseNumber": "EXP-1", "title": "Pérez c/ Empresa", "type": "laboral"},
        )
        assert "Eres LEXIA" in prompt
        assert "DEMANDA - ESTRUCTURA REQUERIDA" in prompt
        assert "--- INSTRUCCIONES ESPECIFICAS ---\nUsar tono formal" in prompt
        assert "--- CONTENIDO BASE DEL DOCUMENTO ---" in prompt
        assert "Fundamento Legal: LCT" in prompt
        assert "Vacio" not in prompt
        assert "Expediente: EXP-1" in prompt
        assert "Tipo: laboral" in prompt
        assert "Genera el documento legal completo" in prompt
        assert "BORRADOR ANTERIOR" not in prompt

    def test_sections_in_order(self):
        prompt = build_draft_prompt(
            "contestacion",
            {"defensas": "x"},
            template_fragment="frag",
            case_context={"caseNumber": "1", "title": "t"},
            demanda_context="Texto de la demanda",
        )
        order = [
            "--- ESTRUCTURA DEL DOCUMENTO ---",
            "--- INSTRUCCIONES ESPECIFICAS ---",
            "--- DATOS PROPORCIONADOS POR EL USUARIO ---",
            "--- CONTEXTO DEL CASO ---",
            "--- DEMANDA A CONTESTAR ---",
        ]
        positions = [prompt.index(section) for section in order]
        assert positions == sorted(positions)

    def test_iteration_prompt(self):
        prompt = build_draft_prompt(
            "apelacion",
            {"agravios": "x"},
            previous_draft="Borrador v1",
            iteration_instruction="Agregar jurisprudencia",
        )
        assert "--- BORRADOR ANTERIOR (para modificar) ---\nBorrador v1" in prompt
        assert '"Agregar jurisprudencia"' in prompt
        assert "Genera el documento legal completo" not in prompt

    @pytest.mark.parametrize("doc_type", ["demanda", "oficio_judicial"])
    def test_user_message(self, doc_type):
        assert build_draft_user_message(doc_type).startswith("Genera el borrador completo")
        assert "Agregar" in build_draft_user_message(doc_type, "Agregar firma")
