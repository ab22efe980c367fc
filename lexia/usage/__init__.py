# lexia/usage/__init__.py
"""Credits, plans and usage recording."""

from .credits import credits_for_intent, plan_credits_limit
from .tracker import CreditsRemaining, UsageTracker, UserPlan, period_start

__all__ = [
    "credits_for_intent",
    "plan_credits_limit",
    "CreditsRemaining",
    "UsageTracker",
    "UserPlan",
    "period_start",
]
