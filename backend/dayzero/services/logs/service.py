"""
Logs Service - recording habit logs and querying history
"""
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional
import logging
import threading
import uuid

from dayzero.core.exceptions import (
    HabitNotFoundError,
    InvalidLogDataError,
    StorageUnavailableError,
    ValidationError,
)
from dayzero.models.log import HabitLog, Mood, coerce_mood
from dayzero.services import metrics
from dayzero.services.habits.repository import HabitRepository
from dayzero.services.profile import ProfileService
from dayzero.utils.timezone import local_day_id, parse_day_id, utc_now
from .repository import LogRepository

logger = logging.getLogger(__name__)

STATUS_DONE = "yes"
STATUS_NOT_DONE = "no"


def day_status_index(logs: Iterable[HabitLog]) -> Dict[str, Dict[str, str]]:
    """
    Per-day status view derived from the flat log list

    Returns:
        {day_id: {habit_id: "yes" | "no"}}, "yes" when the habit has a
        completed log that day, "no" when it only has skipped or mood-less logs
    """
    index: Dict[str, Dict[str, str]] = {}
    for log in logs:
        day = index.setdefault(log.date, {})
        if metrics.is_completed_log(log):
            day[log.habit_id] = STATUS_DONE
        else:
            day.setdefault(log.habit_id, STATUS_NOT_DONE)
    return index


class LogService:
    """
    Adds and queries habit logs

    The store is permissive: several logs per habit per day are allowed.
    Use has_logged_today as the UI guard for one-tap logging.
    """

    def __init__(
        self,
        repository: LogRepository,
        habits: HabitRepository,
        profiles: ProfileService,
        clock: Callable[[], datetime] = utc_now
    ):
        self.repository = repository
        self.habits = habits
        self.profiles = profiles
        self.clock = clock
        self._lock = threading.RLock()

    def _tz(self, tz: Optional[str]) -> str:
        return tz or self.profiles.get_profile().timezone

    def today(self, tz: Optional[str] = None) -> str:
        return local_day_id(self._tz(tz), self.clock())

    def add_log(
        self,
        habit_id: str,
        note: Optional[str] = None,
        mood: Optional[Mood] = None,
        date: Optional[str] = None,
        tz: Optional[str] = None,
        require_habit: bool = False
    ) -> HabitLog:
        """
        Record a log for a habit

        Args:
            habit_id: Habit being logged
            note: Optional reflection note
            mood: Optional mood; only non-skip moods count as completions
            date: Day YYYY-MM-DD, defaults to today in the profile timezone
            tz: Timezone override for resolving today
            require_habit: Reject logs for habits that do not exist

        Raises:
            InvalidLogDataError: If habit_id, date or mood are invalid
            HabitNotFoundError: If require_habit is set and the habit is missing
            StorageUnavailableError: If the write fails
        """
        if not isinstance(habit_id, str) or not habit_id:
            raise InvalidLogDataError("habit_id is required")
        if date is not None:
            try:
                parse_day_id(date)
            except ValidationError as e:
                raise InvalidLogDataError(str(e))
        if mood is not None:
            try:
                mood = Mood(coerce_mood(mood))
            except ValueError:
                raise InvalidLogDataError(f"Unknown mood: {mood}")

        if require_habit and self.habits.get_habit_by_id(habit_id) is None:
            raise HabitNotFoundError(f"Habit {habit_id} not found")

        log = HabitLog(
            id=uuid.uuid4().hex,
            habit_id=habit_id,
            date=date or self.today(tz),
            note=note,
            mood=mood
        )
        with self._lock:
            self.repository.append_logs([log])
        logger.info(f"Log added for habit {habit_id} on {log.date} (mood={log.mood.value if log.mood else None})")
        return log

    def all_logs(self, include_orphans: bool = False) -> List[HabitLog]:
        """
        Every log, newest first; empty if storage is unreachable

        Logs of deleted habits are hidden unless include_orphans is set.
        """
        try:
            logs = self.repository.get_all_logs()
            if include_orphans:
                return logs
            known = {h.id for h in self.habits.get_all_habits()}
        except StorageUnavailableError as e:
            logger.warning(f"Logs unavailable, showing none: {e}")
            return []
        return [log for log in logs if log.habit_id in known]

    def query(
        self,
        habit_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        predicate: Optional[Callable[[HabitLog], bool]] = None,
        include_orphans: bool = False
    ) -> List[HabitLog]:
        """
        Filter logs by habit, inclusive day range and/or an arbitrary predicate

        Raises:
            InvalidLogDataError: If start or end is not a valid day id
        """
        for bound in (start, end):
            if bound is not None:
                try:
                    parse_day_id(bound)
                except ValidationError as e:
                    raise InvalidLogDataError(str(e))

        results = []
        for log in self.all_logs(include_orphans=include_orphans):
            if habit_id is not None and log.habit_id != habit_id:
                continue
            if start is not None and log.date < start:
                continue
            if end is not None and log.date > end:
                continue
            if predicate is not None and not predicate(log):
                continue
            results.append(log)
        return results

    def has_logged_today(
        self,
        habit_id: str,
        logs: Optional[Iterable[HabitLog]] = None,
        tz: Optional[str] = None
    ) -> bool:
        """True if any log exists for the habit today (the quick-log guard)"""
        if logs is None:
            logs = self.query(habit_id=habit_id)
        return metrics.has_logged_today(habit_id, logs, self._tz(tz), self.clock())

    def day_statuses(self) -> Dict[str, Dict[str, str]]:
        return day_status_index(self.all_logs())

    def migrate_legacy_logs(self) -> int:
        with self._lock:
            return self.repository.migrate_legacy_day_logs()
