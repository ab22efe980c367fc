# lexia/usage/tracker.py
"""
Usage accounting against the user's monthly plan.

A period is the calendar month, identified by its first day (YYYY-MM-01).
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from lexia.models.records import PeriodUsage
from lexia.models.sqlite_store import SQLiteStore

from .credits import DEFAULT_PLAN_CREDITS, DEFAULT_PLAN_SLUG, plan_credits_limit

logger = logging.getLogger(__name__)


@dataclass
class UserPlan:
    slug: str
    credits_per_month: float


@dataclass
class CreditsRemaining:
    allowed: bool
    remaining: float
    limit: float


def period_start(today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return today.replace(day=1).isoformat()


class UsageTracker:
    def __init__(self, store: SQLiteStore) -> None:
        self.store = store

    async def get_user_plan(self, user_id: str) -> UserPlan:
        """The user's plan, or the individual plan when none is assigned."""
        profile = await self.store.get_profile(user_id)
        if profile is None or not profile.lexia_plan_id:
            return UserPlan(DEFAULT_PLAN_SLUG, DEFAULT_PLAN_CREDITS)

        plan = await self.store.get_plan(profile.lexia_plan_id)
        if plan is None:
            return UserPlan(DEFAULT_PLAN_SLUG, DEFAULT_PLAN_CREDITS)
        return UserPlan(plan.slug, plan.credits_per_month or plan_credits_limit(plan.slug))

    async def get_current_period_usage(self, user_id: str) -> PeriodUsage:
        return await self.store.get_period_usage(user_id, period_start())

    async def check_credits_remaining(self, user_id: str) -> CreditsRemaining:
        plan = await self.get_user_plan(user_id)
        usage = await self.get_current_period_usage(user_id)
        remaining = max(0.0, plan.credits_per_month - usage.credits_used)
        return CreditsRemaining(
            allowed=remaining > 0, remaining=remaining, limit=plan.credits_per_month
        )

    async def record_usage(
        self, user_id: str, trace_id: str, intent: str, credits: float, tokens: int
    ) -> bool:
        """Record one request; a repeated trace_id is ignored (returns False)."""
        recorded = await self.store.record_usage(
            user_id, trace_id, intent, credits, tokens, period_start()
        )
        if recorded:
            logger.info(
                f"Recorded usage {trace_id}: user={user_id} intent={intent} "
                f"credits={credits} tokens={tokens}"
            )
        return recorded
