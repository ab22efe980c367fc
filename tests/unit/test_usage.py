# tests/unit/test_usage.py
"""Unit tests for credits, plans and usage tracking."""

from datetime import date

import pytest

from conftest import USER_ID
from lexia.models.records import Plan, Profile
from lexia.usage import UsageTracker, credits_for_intent, period_start, plan_credits_limit


class TestCredits:
    def test_intent_costs(self):
        assert credits_for_intent("document_drafting") == 2
        assert credits_for_intent("legal_analysis") == 3
        assert credits_for_intent("general_chat") == 0.5
        assert credits_for_intent("something_new") == 1

    def test_plan_limits(self):
        assert plan_credits_limit("professional") == 600
        assert plan_credits_limit("unknown") == 300

    def test_period_start(self):
        assert period_start(date(2024, 6, 17)) == "2024-06-01"


class TestUsageTracker:
    @pytest.mark.asyncio
    async def test_default_plan(self, store):
        plan = await UsageTracker(store).get_user_plan(USER_ID)
        assert plan.slug == "individual"
        assert plan.credits_per_month == 300

    @pytest.mark.asyncio
    async def test_assigned_plan(self, store):
        await store.add_plan(Plan(id="p-estudio", slug="estudio", credits_per_month=1000))
        await store.upsert_profile(Profile(id=USER_ID, lexia_plan_id="p-estudio"))
        plan = await UsageTracker(store).get_user_plan(USER_ID)
        assert plan.slug == "estudio"
        assert plan.credits_per_month == 1000

    @pytest.mark.asyncio
    async def test_plan_without_allowance_uses_slug_default(self, store):
        await store.add_plan(Plan(id="p-pro", slug="professional", credits_per_month=0))
        await store.upsert_profile(Profile(id=USER_ID, lexia_plan_id="p-pro"))
        plan = await UsageTracker(store).get_user_plan(USER_ID)
        assert plan.credits_per_month == 600

    @pytest.mark.asyncio
    async def test_credits_remaining(self, store):
        await store.add_plan(Plan(id="p-tiny", slug="tiny", credits_per_month=4))
        await store.upsert_profile(Profile(id=USER_ID, lexia_plan_id="p-tiny"))
        tracker = UsageTracker(store)

        assert (await tracker.check_credits_remaining(USER_ID)).allowed
        await tracker.record_usage(USER_ID, "t1", "document_drafting", 2, 10)
        await tracker.record_usage(USER_ID, "t2", "document_drafting", 2, 10)

        remaining = await tracker.check_credits_remaining(USER_ID)
        assert not remaining.allowed
        assert remaining.remaining == 0
        assert remaining.limit == 4

    @pytest.mark.asyncio
    async def test_record_usage_idempotent(self, store):
        tracker = UsageTracker(store)
        assert await tracker.record_usage(USER_ID, "t1", "document_drafting", 2, 10)
        assert not await tracker.record_usage(USER_ID, "t1", "document_drafting", 2, 10)
        usage = await tracker.get_current_period_usage(USER_ID)
        assert usage.requests == 1
