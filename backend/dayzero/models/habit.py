"""
Pydantic models for habits
"""
import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from dayzero.core.constants import (
    DEFAULT_HABIT_ICON,
    MAX_TARGET_PER_WEEK,
    MIN_TARGET_PER_WEEK,
    TIME_PATTERN,
)

_TIME_RE = re.compile(TIME_PATTERN)


def is_valid_time(value: str) -> bool:
    """True for 24-hour HH:MM strings (00:00 - 23:59)"""
    return isinstance(value, str) and bool(_TIME_RE.fullmatch(value))


def _check_times(times: Optional[List[str]]) -> Optional[List[str]]:
    if times is None:
        return times
    for t in times:
        if not is_valid_time(t):
            raise ValueError(f"Invalid time format '{t}'. Use HH:MM (24-hour format)")
    return times


class Habit(BaseModel):
    """A tracked habit. Identity fields and created_day_id never change after creation."""
    id: str
    title: str = Field(..., min_length=1)
    icon: str = DEFAULT_HABIT_ICON
    target_per_week: int = Field(..., ge=MIN_TARGET_PER_WEEK, le=MAX_TARGET_PER_WEEK)
    target_times: List[str] = Field(default_factory=list)
    created_at: int = Field(..., description="Epoch milliseconds")
    updated_at: int = Field(..., description="Epoch milliseconds")
    created_day_id: str = Field(..., description="YYYY-MM-DD in the creator's timezone")


class HabitCreateRequest(BaseModel):
    """Request model for creating a habit; target_per_week is clamped, not rejected"""
    title: str = Field(..., min_length=1, max_length=200, description="Habit title")
    icon: str = Field(DEFAULT_HABIT_ICON, description="Presentational icon name")
    target_per_week: Optional[int] = Field(None, description="Completions per Sunday-Saturday week")
    target_times: Optional[List[str]] = Field(None, description="Reminder times in HH:MM format (24-hour)")
    day_id: Optional[str] = Field(None, description="Override for the creation day (YYYY-MM-DD)")
    tz: Optional[str] = Field(None, description="IANA timezone used to derive the creation day")

    @field_validator('target_times')
    @classmethod
    def validate_time_format(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Validate every time is HH:MM"""
        return _check_times(v)


class HabitUpdateRequest(BaseModel):
    """Request model for editing a habit; only these four fields are mutable"""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    icon: Optional[str] = None
    target_per_week: Optional[int] = None
    target_times: Optional[List[str]] = None

    @field_validator('target_times')
    @classmethod
    def validate_time_format(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Validate every time is HH:MM if provided"""
        return _check_times(v)


class HabitSummary(BaseModel):
    """A habit together with its derived metrics"""
    habit: Habit
    streak: int
    week_count: int
    week_pct: float
    logged_today: bool
