"""
Pydantic models for habit logs
"""
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from dayzero.utils.timezone import is_valid_day_id


class Mood(str, Enum):
    """How the user felt about a logged habit; SKIP means it was not done"""
    GREAT = "great"
    OK = "ok"
    HARD = "hard"
    SKIP = "skip"


# Older clients wrote "bad" for what is now "hard"
_MOOD_ALIASES = {"bad": Mood.HARD}


def coerce_mood(v):
    if isinstance(v, str) and v in _MOOD_ALIASES:
        return _MOOD_ALIASES[v]
    return v


def _check_day_id(v: Optional[str]) -> Optional[str]:
    if v is not None and not is_valid_day_id(v):
        raise ValueError(f"Invalid date '{v}'. Use YYYY-MM-DD")
    return v


class HabitLog(BaseModel):
    """
    One journal entry for a habit on a calendar day.
    Several logs per habit per day are legal.
    """
    id: str
    habit_id: str
    date: str = Field(..., description="Local calendar day YYYY-MM-DD")
    note: Optional[str] = None
    mood: Optional[Mood] = None

    @field_validator('mood', mode='before')
    @classmethod
    def normalize_mood(cls, v):
        return coerce_mood(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_day_id(v)


class AddLogRequest(BaseModel):
    """Request model for logging a habit"""
    note: Optional[str] = Field(None, max_length=500, description="Optional reflection note")
    mood: Optional[Mood] = Field(None, description="great / ok / hard / skip")
    date: Optional[str] = Field(None, description="Day YYYY-MM-DD, defaults to today")

    @field_validator('mood', mode='before')
    @classmethod
    def normalize_mood(cls, v):
        return coerce_mood(v)

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return _check_day_id(v)
