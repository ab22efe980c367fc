# tests/unit/test_sqlite_store.py
"""
Unit tests for SQLiteStore persistence.

Uses the seeded store fixture from conftest (user-1 leads case-1).
"""

import pytest

from conftest import CASE_ID, OTHER_USER_ID, USER_ID
from lexia.models.records import ActivityEntry, CaseRecord, Plan, Profile, TemplateRecord
from lexia.models.sqlite_store import SQLiteStore, hash_token


def _analysis(title: str, level: str = "medium", score: float = 5.0) -> dict:
    return {
        "caseId": CASE_ID,
        "caseNumber": "EXP-123/2024",
        "caseTitle": title,
        "analyzedAt": "2024-06-01T10:00:00+00:00",
        "riskMatrix": {"riskLevel": level, "overallScore": score},
        "recommendations": {"primaryStrategy": "moderate"},
    }


class TestProfilesAndCases:
    @pytest.mark.asyncio
    async def test_profile_roundtrip(self, store: SQLiteStore):
        profile = await store.get_profile(USER_ID)
        assert profile is not None
        assert profile.organization_id == "org-1"
        assert profile.system_role == "lawyer"

    @pytest.mark.asyncio
    async def test_profile_upsert_updates(self, store: SQLiteStore):
        await store.upsert_profile(Profile(id=USER_ID, system_role="admin_general"))
        assert (await store.get_profile(USER_ID)).system_role == "admin_general"

    @pytest.mark.asyncio
    async def test_case_roundtrip(self, store: SQLiteStore):
        case = await store.get_case(CASE_ID)
        assert case.case_number == "EXP-123/2024"
        assert case.estimated_value == 1500000
        assert await store.get_case("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_case_raises(self, store: SQLiteStore):
        with pytest.raises(ValueError, match="already exists"):
            await store.add_case(CaseRecord(id=CASE_ID))

    @pytest.mark.asyncio
    async def test_case_roles(self, store: SQLiteStore):
        assert await store.get_case_role(CASE_ID, USER_ID) == "leader"
        assert await store.get_case_role(CASE_ID, OTHER_USER_ID) is None
        await store.assign_case(CASE_ID, OTHER_USER_ID)
        assert await store.get_case_role(CASE_ID, OTHER_USER_ID) == "member"

    @pytest.mark.asyncio
    async def test_company_contact(self, store: SQLiteStore):
        await store.add_person("company-1", portal_user_id="client-1", full_name="Cliente")
        assert await store.is_company_contact("client-1", "company-1")
        assert not await store.is_company_contact("client-1", "company-2")


class TestAnalyses:
    @pytest.mark.asyncio
    async def test_add_and_get(self, store: SQLiteStore):
        record = await store.add_analysis(USER_ID, CASE_ID, _analysis("Primero"))
        fetched = await store.get_analysis(record.id)
        assert fetched.analysis["caseTitle"] == "Primero"
        assert fetched.user_id == USER_ID
        assert fetched.created_at == record.created_at

    @pytest.mark.asyncio
    async def test_each_run_is_a_new_row(self, store: SQLiteStore):
        a = await store.add_analysis(USER_ID, CASE_ID, _analysis("A"))
        b = await store.add_analysis(USER_ID, CASE_ID, _analysis("B"))
        assert a.id != b.id
        assert len(await store.list_analyses(USER_ID)) == 2

    @pytest.mark.asyncio
    async def test_list_projection_newest_first(self, store: SQLiteStore):
        await store.add_analysis(USER_ID, CASE_ID, _analysis("Viejo", "low", 2))
        await store.add_analysis(USER_ID, CASE_ID, _analysis("Nuevo", "high", 7.5))

        rows = await store.list_analyses(USER_ID)
        assert [r["caseTitle"] for r in rows] == ["Nuevo", "Viejo"]
        assert rows[0]["riskLevel"] == "high"
        assert rows[0]["overallScore"] == 7.5
        assert rows[0]["primaryStrategy"] == "moderate"
        assert "analysis" not in rows[0]

    @pytest.mark.asyncio
    async def test_list_by_case_includes_other_users(self, store: SQLiteStore):
        await store.add_analysis(USER_ID, CASE_ID, _analysis("Mío"))
        await store.add_analysis(OTHER_USER_ID, CASE_ID, _analysis("Ajeno"))

        assert len(await store.list_analyses(USER_ID)) == 1
        assert len(await store.list_analyses(USER_ID, case_id=CASE_ID)) == 2

    @pytest.mark.asyncio
    async def test_list_limit(self, store: SQLiteStore):
        for i in range(25):
            await store.add_analysis(USER_ID, CASE_ID, _analysis(f"#{i}"))
        rows = await store.list_analyses(USER_ID)
        assert len(rows) == 20
        assert rows[0]["caseTitle"] == "#24"


class TestTemplates:
    @pytest.mark.asyncio
    async def test_org_template_preferred(self, store: SQLiteStore):
        await store.add_template(TemplateRecord(id="g", document_type="demanda", system_prompt_fragment="global"))
        await store.add_template(
            TemplateRecord(id="o", document_type="demanda", organization_id="org-1", system_prompt_fragment="org")
        )
        found = await store.find_template("demanda", organization_id="org-1")
        assert found.id == "o"

    @pytest.mark.asyncio
    async def test_global_fallback_and_structure(self, store: SQLiteStore):
        await store.add_template(
            TemplateRecord(id="g", document_type="demanda", structure_schema={"fields": ["hechos"]})
        )
        found = await store.find_template("demanda", organization_id="org-2")
        assert found.id == "g"
        assert found.structure_schema == {"fields": ["hechos"]}

    @pytest.mark.asyncio
    async def test_inactive_and_other_variant_ignored(self, store: SQLiteStore):
        await store.add_template(TemplateRecord(id="x", document_type="demanda", is_active=False))
        await store.add_template(TemplateRecord(id="y", document_type="demanda", variant="laboral"))
        assert await store.find_template("demanda") is None
        assert (await store.find_template("demanda", variant="laboral")).id == "y"


class TestActivityUsageTokens:
    @pytest.mark.asyncio
    async def test_activity_log(self, store: SQLiteStore):
        await store.log_activity(
            ActivityEntry(USER_ID, "lexia_query", "case", CASE_ID, "Lexia Estratega", case_id=CASE_ID)
        )
        entries = await store.list_activity(USER_ID)
        assert len(entries) == 1
        assert entries[0].entity_id == CASE_ID
        assert entries[0].created_at

    @pytest.mark.asyncio
    async def test_usage_idempotent_on_trace(self, store: SQLiteStore):
        assert await store.record_usage(USER_ID, "t1", "document_drafting", 2, 500, "2024-06-01")
        assert not await store.record_usage(USER_ID, "t1", "document_drafting", 2, 500, "2024-06-01")
        assert await store.record_usage(USER_ID, "t2", "document_drafting", 2, 100, "2024-06-01")

        usage = await store.get_period_usage(USER_ID, "2024-06-01")
        assert usage.credits_used == 4
        assert usage.tokens_used == 600
        assert usage.requests == 2

    @pytest.mark.asyncio
    async def test_empty_period(self, store: SQLiteStore):
        usage = await store.get_period_usage(USER_ID, "2030-01-01")
        assert usage.credits_used == 0
        assert usage.requests == 0

    @pytest.mark.asyncio
    async def test_api_token(self, store: SQLiteStore):
        token = await store.create_api_token(USER_ID)
        assert await store.resolve_api_token(token) == USER_ID
        assert await store.resolve_api_token("bogus") is None
        assert hash_token(token) != token

    @pytest.mark.asyncio
    async def test_plan_roundtrip(self, store: SQLiteStore):
        await store.add_plan(Plan(id="p1", slug="estudio", credits_per_month=1000))
        plan = await store.get_plan("p1")
        assert plan.slug == "estudio"
        assert plan.credits_per_month == 1000
