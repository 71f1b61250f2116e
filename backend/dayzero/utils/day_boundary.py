"""
Day Boundary Resolver - decides which logical day is "today" and when the
daily AI quota rolls over
"""
from datetime import timedelta
from typing import Optional
import logging

from dayzero.core.config import settings
from dayzero.core.constants import (
    DAY_ID_FORMAT,
    DEFAULT_DAILY_RESET_HOUR,
    RESET_POLICY_MIDNIGHT,
    RESET_POLICY_RESET_HOUR,
)
from dayzero.core.exceptions import ValidationError
from dayzero.models.quota import AIQuotaState
from .timezone import Instant, local_now

logger = logging.getLogger(__name__)


def effective_day_id(
    tz: str,
    reset_hour_local: int = DEFAULT_DAILY_RESET_HOUR,
    instant: Optional[Instant] = None,
    policy: Optional[str] = None
) -> str:
    """
    Logical day identifier used for quota resets

    Policies:
        midnight   - the plain civil date in tz; reset_hour_local is ignored
        reset_hour - the day only advances once reset_hour_local has passed,
                     so the logical day runs from HH:00 to HH:00 and is named
                     after the date it started on

    Args:
        tz: IANA timezone
        reset_hour_local: Hour 0-23 at which the reset_hour policy rolls over
        instant: Instant to resolve (defaults to now)
        policy: Override for settings.DAY_RESET_POLICY

    Raises:
        ValidationError: If the policy or hour is invalid
    """
    policy = policy or settings.DAY_RESET_POLICY
    local = local_now(tz, instant)

    if policy == RESET_POLICY_MIDNIGHT:
        return local.strftime(DAY_ID_FORMAT)

    if policy == RESET_POLICY_RESET_HOUR:
        if not 0 <= reset_hour_local <= 23:
            raise ValidationError(f"reset hour must be within 0-23, got {reset_hour_local}")
        if local.hour < reset_hour_local:
            return (local.date() - timedelta(days=1)).strftime(DAY_ID_FORMAT)
        return local.strftime(DAY_ID_FORMAT)

    raise ValidationError(f"Unknown day reset policy: {policy}")


def ensure_daily_reset(
    quota: AIQuotaState,
    tz: str,
    reset_hour_local: int = DEFAULT_DAILY_RESET_HOUR,
    instant: Optional[Instant] = None,
    policy: Optional[str] = None
) -> AIQuotaState:
    """
    Zero the AI usage counter when the logical day has changed

    Returns:
        A fresh state when a reset happened, otherwise the very same object
        so callers can skip a redundant write with an identity check
    """
    day = effective_day_id(tz, reset_hour_local, instant, policy)
    if quota.last_reset_local_day_id != day:
        logger.info(f"AI quota reset for {day} (previous reset: {quota.last_reset_local_day_id})")
        return AIQuotaState(used_today=0, last_reset_local_day_id=day)
    return quota
