# lexia/usage/credits.py
"""Credit cost per request intent and monthly credit allowance per plan."""

CREDITS_BY_INTENT: dict[str, float] = {
    "general_chat": 0.5,
    "case_query": 0.5,
    "unknown": 0.5,
    "procedural_query": 0.5,
    "document_summary": 1,
    "document_drafting": 2,
    "legal_analysis": 3,
}

DEFAULT_CREDITS = 1

PLAN_CREDITS: dict[str, float] = {
    "individual": 300,
    "professional": 600,
    "estudio": 1000,
}

DEFAULT_PLAN_SLUG = "individual"
DEFAULT_PLAN_CREDITS = 300


def credits_for_intent(intent: str) -> float:
    return CREDITS_BY_INTENT.get(intent, DEFAULT_CREDITS)


def plan_credits_limit(plan_slug: str) -> float:
    """Unknown slugs get the individual allowance."""
    return PLAN_CREDITS.get(plan_slug, DEFAULT_PLAN_CREDITS)
