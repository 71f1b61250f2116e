"""
Pydantic models for plans, entitlements and AI coach quota
"""
from pydantic import BaseModel, Field
from typing import Optional

from dayzero.core.constants import PLAN_FREE


class AIQuotaState(BaseModel):
    """Coach queries used since the last daily reset"""
    used_today: int = Field(0, ge=0)
    last_reset_local_day_id: Optional[str] = None


class PlanCache(BaseModel):
    """Last known plan tier and when it was fetched (epoch ms, 0 = never)"""
    plan: str = PLAN_FREE
    fetched_at: int = 0


class PlanLimits(BaseModel):
    """Per-plan limits; float('inf') means unlimited"""
    max_habits: float
    max_goals: float
    ai_per_day: int


class CoachAccess(BaseModel):
    """Result of the coach quota gate"""
    allowed: bool
    used: int
    max: int

    @property
    def remaining(self) -> int:
        return max(0, self.max - self.used)
