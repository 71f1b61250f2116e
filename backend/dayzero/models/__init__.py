"""
Pydantic models for the application
"""
from dayzero.models.habit import (
    Habit,
    HabitCreateRequest,
    HabitUpdateRequest,
    HabitSummary
)
from dayzero.models.log import Mood, HabitLog, AddLogRequest
from dayzero.models.quota import AIQuotaState, PlanCache, PlanLimits, CoachAccess
from dayzero.models.profile import Profile, ProfileUpdateRequest, NotificationPreferences
from dayzero.models.coach import CoachRequest, CoachAnswer

__all__ = [
    "Habit",
    "HabitCreateRequest",
    "HabitUpdateRequest",
    "HabitSummary",
    "Mood",
    "HabitLog",
    "AddLogRequest",
    "AIQuotaState",
    "PlanCache",
    "PlanLimits",
    "CoachAccess",
    "Profile",
    "ProfileUpdateRequest",
    "NotificationPreferences",
    "CoachRequest",
    "CoachAnswer"
]
