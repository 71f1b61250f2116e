"""
Plan tiers and their limits
"""
from dayzero.core.constants import (
    FREE_AI_PER_DAY,
    FREE_MAX_GOALS,
    FREE_MAX_HABITS,
    PLAN_FREE,
    PLANS,
    PREMIUM_AI_PER_DAY,
    PREMIUM_PLANS,
)
from dayzero.models.quota import PlanLimits

UNLIMITED = float("inf")


def normalize_plan(plan) -> str:
    """Known tier name, or free for anything unrecognized"""
    return plan if plan in PLANS else PLAN_FREE


def is_premium(plan: str) -> bool:
    """Premium, lifetime and trial all unlock the premium limits"""
    return plan in PREMIUM_PLANS


def get_plan_limits(plan: str) -> PlanLimits:
    if is_premium(plan):
        return PlanLimits(max_habits=UNLIMITED, max_goals=UNLIMITED, ai_per_day=PREMIUM_AI_PER_DAY)
    return PlanLimits(max_habits=FREE_MAX_HABITS, max_goals=FREE_MAX_GOALS, ai_per_day=FREE_AI_PER_DAY)
