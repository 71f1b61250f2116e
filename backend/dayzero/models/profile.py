"""
Pydantic models for the local user profile and notification preferences
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from dayzero.core.constants import (
    DEFAULT_CHECK_IN_TIME,
    DEFAULT_DAILY_RESET_HOUR,
    DEFAULT_REFLECT_TIME,
)
from dayzero.utils.timezone import is_valid_timezone
from .habit import is_valid_time


class Profile(BaseModel):
    """Single-user profile; timezone is fixed at first use and rarely changes"""
    timezone: str
    daily_reset_hour_local: int = Field(DEFAULT_DAILY_RESET_HOUR, ge=0, le=23)
    locale: str = "en-US"

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if not is_valid_timezone(v):
            raise ValueError(f"Unknown timezone '{v}'")
        return v


class ProfileUpdateRequest(BaseModel):
    timezone: Optional[str] = None
    daily_reset_hour_local: Optional[int] = Field(None, ge=0, le=23)
    locale: Optional[str] = None


class NotificationPreferences(BaseModel):
    """Daily check-in / evening reflection prompts"""
    check_in_enabled: bool = True
    check_in_time_local: str = DEFAULT_CHECK_IN_TIME
    reflect_enabled: bool = True
    reflect_time_local: str = DEFAULT_REFLECT_TIME
    push_tokens: List[str] = Field(default_factory=list)

    @field_validator('check_in_time_local', 'reflect_time_local')
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(f"Invalid time format '{v}'. Use HH:MM (24-hour format)")
        return v
