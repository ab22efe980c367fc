# tests/conftest.py
"""
Shared fixtures: a fake model client answering each analysis prompt with
canned JSON, a fake resolver, and a seeded SQLite store.
"""

import json
from pathlib import Path

import pytest
import pytest_asyncio

from lexia.config.schema import LexiaConfig, StorageConfig
from lexia.llm.types import Completion
from lexia.models.records import CaseRecord, Profile
from lexia.models.sqlite_store import SQLiteStore
from lexia.tools.services import build_services

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
CASE_ID = "case-1"

RISK_PAYLOAD = {
    "factors": [
        {
            "id": "r1",
            "name": "Prueba documental débil",
            "description": "Faltan recibos de sueldo",
            "score": 8,
            "level": "high",
            "category": "probatorio",
            "mitigation": "Solicitar informes a AFIP",
        },
        {
            "id": "r2",
            "name": "Plazo de prescripción",
            "description": "Riesgo de prescripción parcial",
            "score": 6,
            "level": "medium",
            "category": "temporal",
            "mitigation": "Interponer demanda sin demora",
        },
        {
            "id": "r3",
            "name": "Solvencia del demandado",
            "description": "Empresa con embargos previos",
            "score": 3,
            "level": "low",
            "category": "económico",
            "mitigation": "Pedir embargo preventivo",
        },
    ],
    "overallScore": 6.5,
    "riskLevel": "medium",
    "summary": "Riesgo moderado, centrado en la prueba",
    "recommendations": ["Reunir prueba documental", "Citar testigos"],
}

JURISPRUDENCE_PAYLOAD = {
    "results": [
        {
            "title": "Pérez c/ Transportes SA s/ despido",
            "court": "Cámara del Trabajo de Córdoba, Sala 2",
            "date": "2019-05-12",
            "summary": "Se presumió la relación laboral",
            "relevance": "Hechos análogos",
            "keyArguments": ["Presunción del art. 23 LCT"],
            "indemnizationAmount": "$1.200.000",
        },
        {
            "title": "Gómez c/ Servicios SRL s/ diferencias salariales",
            "court": "TSJ Córdoba, Sala Laboral",
            "date": "2021",
            "summary": "Carga probatoria del empleador",
            "relevance": "Distribución de la carga de la prueba",
            "keyArguments": ["Art. 55 LCT", "Libros laborales"],
        },
    ]
}


def _scenario(type_: str, name: str, probability: float, months: float) -> dict:
    return {
        "type": type_,
        "name": name,
        "successProbability": probability,
        "estimatedDurationMonths": months,
        "estimatedCostRange": {"min": 500000, "max": 900000},
        "pros": ["Menor costo", "Menor exposición"],
        "cons": ["Menor monto", "Concesiones"],
        "recommendedActions": [
            {"action": "Enviar carta documento", "timeframe": "Semana 1", "priority": "high"},
            {"action": "Audiencia SECLO", "timeframe": "Mes 1", "priority": "medium"},
        ],
        "description": f"Escenario {name}",
    }


SCENARIOS_PAYLOAD = {
    "scenarios": [
        _scenario("conservative", "Acuerdo temprano", 85, 3),
        _scenario("moderate", "Negociación con demanda", 70, 12),
        _scenario("aggressive", "Litigio completo", 55, 30),
    ]
}

TIMELINE_PAYLOAD = {
    "milestones": [
        {
            "id": "m1",
            "title": "Reunión de prueba",
            "description": "Recolectar documentación",
            "phase": "preparation",
            "offsetDays": 0,
            "isCritical": True,
            "dependencies": [],
            "alerts": [],
        },
        {
            "id": "m2",
            "title": "Carta documento",
            "description": "Intimación al empleador",
            "phase": "preparation",
            "offsetDays": 10,
            "isCritical": False,
            "dependencies": ["m1"],
            "alerts": ["Verificar domicilio"],
        },
        {
            "id": "m3",
            "title": "Interposición de demanda",
            "description": "Presentar demanda",
            "phase": "litigation",
            "offsetDays": 45,
            "isCritical": True,
            "dependencies": ["m1", "m2"],
            "alerts": [],
        },
        {
            "id": "m4",
            "title": "Sentencia",
            "description": "Sentencia de primera instancia",
            "phase": "resolution",
            "offsetDays": 365,
            "isCritical": True,
            "dependencies": ["m3"],
            "alerts": [],
        },
    ],
    "criticalPath": ["m1", "m3", "m4"],
    "totalEstimatedMonths": 12,
    "alerts": ["Plazo de prescripción: 2 años"],
}

RECOMMENDATIONS_PAYLOAD = {
    "primaryStrategy": "moderate",
    "reasoning": "Equilibrio entre riesgo y resultado",
    "nextSteps": ["Reunir prueba", "Enviar carta documento", "Preparar demanda"],
}

MARKERS = {
    "TAREA: MATRIZ DE RIESGOS": "risk",
    "TAREA: JURISPRUDENCIA": "jurisprudence",
    "TAREA: ESCENARIOS": "scenarios",
    "TAREA: TIMELINE": "timeline",
    "TAREA: RECOMENDACIÓN FINAL": "recommendations",
}


def canned_payloads() -> dict[str, dict]:
    return {
        "risk": json.loads(json.dumps(RISK_PAYLOAD)),
        "jurisprudence": json.loads(json.dumps(JURISPRUDENCE_PAYLOAD)),
        "scenarios": json.loads(json.dumps(SCENARIOS_PAYLOAD)),
        "timeline": json.loads(json.dumps(TIMELINE_PAYLOAD)),
        "recommendations": json.loads(json.dumps(RECOMMENDATIONS_PAYLOAD)),
    }


class FakeLLMClient:
    """
    Answers analysis prompts by their task marker and streams fixed chunks.

    Attributes:
        payloads: stage name -> JSON payload (or raw string) to return
        fail_on: stage names whose completion raises
        calls: stage names in the order they were requested
        stream_chunks: chunks yielded by stream()
        stream_error: raised by stream() before the first chunk
        stream_calls: kwargs of every stream() call
    """

    def __init__(self) -> None:
        self.payloads = canned_payloads()
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self.stream_chunks = ["Borrador ", "de ", "prueba."]
        self.stream_error: Exception | None = None
        self.stream_calls: list[dict] = []
        self.closed = False

    async def complete(self, messages, model, temperature=None, max_tokens=4096, json_mode=False):
        first_line = messages[-1]["content"].split("\n", 1)[0].strip()
        stage = MARKERS[first_line]
        self.calls.append(stage)
        if stage in self.fail_on:
            raise RuntimeError(f"{stage} provider error")
        payload = self.payloads[stage]
        text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
        return Completion(text=text, model=model, input_tokens=100, output_tokens=50)

    async def stream(
        self,
        messages,
        model,
        temperature=None,
        max_tokens=4096,
        thinking_budget=None,
        usage=None,
    ):
        self.stream_calls.append(
            {
                "messages": messages,
                "model": model,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "thinking_budget": thinking_budget,
            }
        )
        if self.stream_error is not None:
            raise self.stream_error
        for chunk in self.stream_chunks:
            yield chunk
        if usage is not None:
            usage.input_tokens = 200
            usage.output_tokens = 300

    async def close(self) -> None:
        self.closed = True


class FakeResolver:
    """One FakeLLMClient per provider; records every resolved model string."""

    def __init__(self) -> None:
        self.clients: dict[str, FakeLLMClient] = {}
        self.resolved: list[str] = []
        self.closed = False

    def client_for(self, provider: str) -> FakeLLMClient:
        return self.clients.setdefault(provider, FakeLLMClient())

    def resolve(self, model_string: str):
        provider, _, model_id = model_string.partition("/")
        self.resolved.append(model_string)
        return self.client_for(provider), model_id

    @property
    def total_calls(self) -> int:
        return sum(len(c.calls) + len(c.stream_calls) for c in self.clients.values())

    async def close(self) -> None:
        self.closed = True


class DenyAll:
    """Permission checker that refuses everything and counts the checks."""

    def __init__(self) -> None:
        self.checks: list[tuple[str, str, str]] = []

    async def check(self, user_id: str, case_id: str, permission: str = "can_view") -> bool:
        self.checks.append((user_id, case_id, permission))
        return False


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def config(tmp_path: Path) -> LexiaConfig:
    return LexiaConfig(storage=StorageConfig(db_path=str(tmp_path / "lexia.db")))


async def seed_store(store: SQLiteStore) -> SQLiteStore:
    """Initialize the store with one lawyer assigned to one described case."""
    await store.initialize()
    await store.upsert_profile(Profile(id=USER_ID, full_name="Ana Abogada", organization_id="org-1"))
    await store.upsert_profile(Profile(id=OTHER_USER_ID, full_name="Otro Abogado", organization_id="org-1"))
    await store.add_case(
        CaseRecord(
            id=CASE_ID,
            case_number="EXP-123/2024",
            title="Pérez c/ Empresa SA",
            case_type="laboral",
            description="Despido sin causa de un trabajador no registrado",
            filing_date="2024-03-01",
            jurisdiction="Córdoba",
            estimated_value=1500000,
            organization_id="org-1",
        )
    )
    await store.assign_case(CASE_ID, USER_ID, "leader")
    return store


@pytest_asyncio.fixture
async def store(config: LexiaConfig) -> SQLiteStore:
    return await seed_store(SQLiteStore(config.storage.db_path))


@pytest.fixture
def services(config: LexiaConfig, store: SQLiteStore, fake_resolver: FakeResolver):
    return build_services(config, store=store, resolver=fake_resolver)
