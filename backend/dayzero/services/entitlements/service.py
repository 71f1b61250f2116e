"""
Entitlement Service - plan cache, plan limits and the AI coach quota gate
"""
from datetime import datetime
from typing import Callable, Optional
import logging
import threading

from pydantic import ValidationError as PydanticValidationError

from dayzero.core.constants import KEY_AI_LIMITS, KEY_GOALS, KEY_PLAN_CACHE
from dayzero.core.exceptions import RemoteUnavailableError
from dayzero.models.quota import AIQuotaState, CoachAccess, PlanCache, PlanLimits
from dayzero.services.habits.repository import HabitRepository
from dayzero.services.profile import ProfileService, default_profile
from dayzero.storage import KeyValueStore
from dayzero.utils.day_boundary import ensure_daily_reset
from dayzero.utils.timezone import utc_now
from .plans import get_plan_limits, normalize_plan

logger = logging.getLogger(__name__)


class EntitlementService:
    """
    Decides what the current plan allows

    Missing plan or quota records read as free / unused. Store failures on
    these reads propagate as StorageUnavailableError so a broken store never
    silently grants or denies access.
    """

    def __init__(
        self,
        store: KeyValueStore,
        profiles: ProfileService,
        habits: HabitRepository,
        plan_source=None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.store = store
        self.profiles = profiles
        self.habits = habits
        self.plan_source = plan_source
        self.clock = clock
        self._lock = threading.RLock()

    # ========================================================================
    # PLAN
    # ========================================================================

    def get_plan_cache(self) -> PlanCache:
        raw = self.store.get(KEY_PLAN_CACHE)
        if not raw:
            return PlanCache()
        try:
            cache = PlanCache(**raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed plan cache: {e}")
            return PlanCache()
        return cache.model_copy(update={"plan": normalize_plan(cache.plan)})

    def get_plan(self) -> str:
        return self.get_plan_cache().plan

    def set_plan(self, plan: str) -> PlanCache:
        cache = PlanCache(plan=normalize_plan(plan), fetched_at=int(self.clock().timestamp() * 1000))
        self.store.set(KEY_PLAN_CACHE, cache.model_dump())
        logger.info(f"Plan cached: {cache.plan}")
        return cache

    def refresh_plan(self, user_id: Optional[str]) -> str:
        """
        Pull the plan from the remote source into the cache

        Remote failures keep the last cached plan.

        Returns:
            The plan now in effect
        """
        if self.plan_source is None or not user_id:
            return self.get_plan()
        try:
            plan = self.plan_source.fetch_plan(user_id)
        except RemoteUnavailableError as e:
            logger.warning(f"Keeping cached plan, remote unavailable: {e}")
            return self.get_plan()
        return self.set_plan(plan).plan

    def get_limits(self) -> PlanLimits:
        return get_plan_limits(self.get_plan())

    # ========================================================================
    # HABIT / GOAL LIMITS
    # ========================================================================

    def can_create_habit(self) -> bool:
        return self.habits.count_habits() < self.get_limits().max_habits

    def can_create_goal(self) -> bool:
        goals = self.store.get(KEY_GOALS, [])
        count = len(goals) if isinstance(goals, list) else 0
        return count < self.get_limits().max_goals

    # ========================================================================
    # AI COACH QUOTA
    # ========================================================================

    def get_quota(self) -> AIQuotaState:
        raw = self.store.get(KEY_AI_LIMITS)
        if not raw:
            return AIQuotaState()
        try:
            return AIQuotaState(**raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed AI limits record: {e}")
            return AIQuotaState()

    def apply_daily_reset(self, tz: Optional[str] = None) -> AIQuotaState:
        """
        Reset the coach counter if the logical day changed, persisting only on change

        The profile timezone wins over tz; tz is the fallback when no profile exists.
        """
        with self._lock:
            profile = self.profiles.get_stored_profile() or default_profile(tz)
            quota = self.get_quota()
            fixed = ensure_daily_reset(quota, profile.timezone, profile.daily_reset_hour_local, self.clock())
            if fixed is not quota:
                self.store.set(KEY_AI_LIMITS, fixed.model_dump())
            return fixed

    def can_use_coach(self, tz: Optional[str] = None) -> CoachAccess:
        """
        Whether another coach query fits today's allowance

        Returns:
            CoachAccess; allowed is False when the quota is used up
        """
        quota = self.apply_daily_reset(tz)
        ai_per_day = self.get_limits().ai_per_day
        return CoachAccess(allowed=quota.used_today < ai_per_day, used=quota.used_today, max=ai_per_day)

    def mark_coach_used(self) -> AIQuotaState:
        """Count one coach query. Does not check the allowance; callers gate first."""
        with self._lock:
            quota = self.get_quota()
            updated = quota.model_copy(update={"used_today": quota.used_today + 1})
            self.store.set(KEY_AI_LIMITS, updated.model_dump())
        logger.info(f"Coach used {updated.used_today} time(s) today")
        return updated
