"""
Metrics Engine - derived habit statistics
Completion classification, streaks and weekly progress.

Every function here is pure: it reads the habits and logs it is given and
never touches storage, so it is safe to call from anywhere, any number of times.
"""
from datetime import datetime
from typing import Iterable, NamedTuple, Optional, Set

from dayzero.core.config import settings
from dayzero.models.habit import Habit, HabitSummary
from dayzero.models.log import HabitLog, Mood
from dayzero.utils.timezone import local_day_id, shift_day_id, week_bounds


class Progress(NamedTuple):
    """Completed logs this week and the share of the weekly target (0.0 - 1.0)"""
    count: int
    pct: float


def is_completed_log(log: HabitLog) -> bool:
    """A log counts as a completion when it has a mood and the mood is not skip"""
    return log.mood is not None and log.mood != Mood.SKIP


def _today(tz: Optional[str], now: Optional[datetime]) -> str:
    return local_day_id(tz or settings.DEFAULT_TIMEZONE, now)


def completed_day_ids(habit_id: str, logs: Iterable[HabitLog]) -> Set[str]:
    """Days on which the habit has at least one completed log"""
    return {log.date for log in logs if log.habit_id == habit_id and is_completed_log(log)}


def within_week(date: str, tz: Optional[str] = None, now: Optional[datetime] = None) -> bool:
    """
    True if a day id falls in the Sunday-Saturday week containing today,
    where today is resolved in tz rather than in the host's local time
    """
    start, end = week_bounds(_today(tz, now))
    # YYYY-MM-DD strings order the same way as the dates they name
    return start <= date <= end


def week_completions(
    habit_id: str,
    logs: Iterable[HabitLog],
    tz: Optional[str] = None,
    now: Optional[datetime] = None
) -> int:
    """Number of completed logs for a habit in the current week"""
    start, end = week_bounds(_today(tz, now))
    return sum(
        1 for log in logs
        if log.habit_id == habit_id and is_completed_log(log) and start <= log.date <= end
    )


def calc_progress(
    habit: Habit,
    logs: Iterable[HabitLog],
    tz: Optional[str] = None,
    now: Optional[datetime] = None
) -> Progress:
    """
    Weekly progress toward target_per_week

    Several completed logs on one day each count. pct is capped at 1.0.
    """
    count = week_completions(habit.id, logs, tz, now)
    pct = min(1.0, count / max(1, habit.target_per_week))
    return Progress(count=count, pct=pct)


def calc_streak(
    habit: Habit,
    logs: Iterable[HabitLog],
    tz: Optional[str] = None,
    now: Optional[datetime] = None
) -> int:
    """
    Consecutive days with a completed log, ending today

    The walk starts at today's day id and steps back one calendar day at a
    time until a day without a completion. Without a completion today the
    streak is 0, however long the run up to yesterday was.
    """
    days = completed_day_ids(habit.id, logs)
    if not days:
        return 0

    streak = 0
    cursor = _today(tz, now)
    while cursor in days:
        streak += 1
        cursor = shift_day_id(cursor, -1)
    return streak


def has_logged_today(
    habit_id: str,
    logs: Iterable[HabitLog],
    tz: Optional[str] = None,
    now: Optional[datetime] = None
) -> bool:
    """
    True if any log (completed or not) exists for the habit today.
    Guards the one-tap "quick log"; the log store itself allows duplicates.
    """
    today = _today(tz, now)
    return any(log.habit_id == habit_id and log.date == today for log in logs)


def summarize_habit(
    habit: Habit,
    logs: Iterable[HabitLog],
    tz: Optional[str] = None,
    now: Optional[datetime] = None
) -> HabitSummary:
    """Bundle streak, weekly progress and logged-today status for one habit"""
    logs = [log for log in logs if log.habit_id == habit.id]
    progress = calc_progress(habit, logs, tz, now)
    return HabitSummary(
        habit=habit,
        streak=calc_streak(habit, logs, tz, now),
        week_count=progress.count,
        week_pct=progress.pct,
        logged_today=has_logged_today(habit.id, logs, tz, now)
    )
