"""
Habits Service - Business logic for habit management
Handles creating, reading, updating, and deleting habits
"""
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union
import logging
import math
import threading
import uuid

from dayzero.core.constants import (
    DEFAULT_HABIT_ICON,
    DEFAULT_TARGET_PER_WEEK,
    MAX_TARGET_PER_WEEK,
    MIN_TARGET_PER_WEEK,
)
from dayzero.core.exceptions import (
    HabitNotFoundError,
    InvalidHabitDataError,
    StorageUnavailableError,
    ValidationError,
)
from dayzero.models.habit import Habit, HabitUpdateRequest, is_valid_time
from dayzero.services.profile import ProfileService
from dayzero.utils.timezone import local_day_id, parse_day_id, utc_now
from .repository import HabitRepository

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "icon", "target_per_week", "target_times")


def clamp_target(value: Any) -> int:
    """
    Coerce a weekly target into 1..7

    Missing or non-numeric values fall back to the default of 5.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_TARGET_PER_WEEK
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_TARGET_PER_WEEK
    return max(MIN_TARGET_PER_WEEK, min(MAX_TARGET_PER_WEEK, int(value)))


def normalize_title(title: Any) -> str:
    """
    Trim a habit title

    Raises:
        InvalidHabitDataError: If the title is missing or blank
    """
    if not isinstance(title, str) or not title.strip():
        raise InvalidHabitDataError("Habit title cannot be empty")
    return title.strip()


def normalize_target_times(times: Optional[List[str]]) -> List[str]:
    """
    Validate HH:MM reminder times, dropping duplicates but keeping order

    Raises:
        InvalidHabitDataError: If any time is malformed
    """
    if times is None:
        return []
    if isinstance(times, str) or not isinstance(times, (list, tuple)):
        raise InvalidHabitDataError("target_times must be a list of HH:MM strings")
    seen = []
    for t in times:
        if not is_valid_time(t):
            raise InvalidHabitDataError(f"Invalid time format: {t}. Use HH:MM (24-hour)")
        if t not in seen:
            seen.append(t)
    return seen


class HabitService:
    """
    Habit lifecycle: create, update, delete, list

    Mutations are serialized by a per-service lock and notify the optional
    reminder scheduler after the write succeeds.
    """

    def __init__(
        self,
        repository: HabitRepository,
        profiles: ProfileService,
        reminders=None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.repository = repository
        self.profiles = profiles
        self.reminders = reminders
        self.clock = clock
        self._lock = threading.RLock()

    def _now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def _schedule_reminders(self, habit: Habit) -> None:
        if self.reminders is None:
            return
        try:
            self.reminders.schedule_habit_reminders(habit, self.profiles.get_profile().timezone)
        except Exception as e:
            logger.error(f"Failed to schedule reminders for habit {habit.id}: {e}")

    def _cancel_reminders(self, habit_id: str) -> None:
        if self.reminders is None:
            return
        try:
            self.reminders.cancel_habit_reminders(habit_id)
        except Exception as e:
            logger.error(f"Failed to cancel reminders for habit {habit_id}: {e}")

    def create(
        self,
        title: str,
        icon: Optional[str] = None,
        target_per_week: Optional[int] = None,
        target_times: Optional[List[str]] = None,
        day_id: Optional[str] = None,
        tz: Optional[str] = None
    ) -> Habit:
        """
        Create a new habit

        Args:
            title: Display title, must not be blank
            icon: Presentational icon name
            target_per_week: Weekly goal, clamped into 1..7 (default 5)
            target_times: Reminder times in HH:MM format
            day_id: Creation day override (YYYY-MM-DD)
            tz: Timezone for the creation day, defaults to the profile timezone

        Returns:
            The stored habit

        Raises:
            InvalidHabitDataError: If title, times or day_id are invalid
            ValidationError: If tz is unknown
            StorageUnavailableError: If the write fails
        """
        title = normalize_title(title)
        times = normalize_target_times(target_times)
        now = self.clock()
        if day_id is not None:
            try:
                parse_day_id(day_id)
            except ValidationError as e:
                raise InvalidHabitDataError(str(e))
            created_day_id = day_id
        else:
            created_day_id = local_day_id(tz or self.profiles.get_profile().timezone, now)

        now_ms = int(now.timestamp() * 1000)
        habit = Habit(
            id=uuid.uuid4().hex,
            title=title,
            icon=icon or DEFAULT_HABIT_ICON,
            target_per_week=clamp_target(target_per_week),
            target_times=times,
            created_at=now_ms,
            updated_at=now_ms,
            created_day_id=created_day_id
        )

        with self._lock:
            self.repository.insert_habit(habit)
        logger.info(f"Habit created: '{habit.title}' ({habit.id}) on {habit.created_day_id}")

        self._schedule_reminders(habit)
        return habit

    def update(self, habit_id: str, patch: Union[HabitUpdateRequest, Dict[str, Any]]) -> Habit:
        """
        Edit title, icon, target_per_week or target_times of a habit

        Raises:
            HabitNotFoundError: If the habit does not exist
            InvalidHabitDataError: If the patch touches other fields or holds invalid values
            StorageUnavailableError: If the write fails
        """
        if isinstance(patch, HabitUpdateRequest):
            patch = patch.model_dump(exclude_unset=True)

        unknown = set(patch) - set(MUTABLE_FIELDS)
        if unknown:
            raise InvalidHabitDataError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        changes: Dict[str, Any] = {}
        if patch.get("title") is not None:
            changes["title"] = normalize_title(patch["title"])
        if patch.get("icon") is not None:
            changes["icon"] = patch["icon"] or DEFAULT_HABIT_ICON
        if patch.get("target_per_week") is not None:
            value = patch["target_per_week"]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidHabitDataError(f"target_per_week must be a number, got {value!r}")
            changes["target_per_week"] = clamp_target(value)
        if "target_times" in patch:
            changes["target_times"] = normalize_target_times(patch["target_times"])

        with self._lock:
            habit = self.repository.get_habit_by_id(habit_id)
            if habit is None:
                raise HabitNotFoundError(f"Habit {habit_id} not found")
            updated = habit.model_copy(update={**changes, "updated_at": self._now_ms()})
            self.repository.replace_habit(updated)
        logger.info(f"Habit updated: '{updated.title}' ({habit_id}) fields={sorted(changes)}")

        self._schedule_reminders(updated)
        return updated

    def delete(self, habit_id: str) -> None:
        """
        Delete a habit. Deleting an absent habit is a no-op.
        Its logs stay stored but are filtered out of log queries.
        """
        with self._lock:
            removed = self.repository.delete_habit(habit_id)
        if removed:
            logger.info(f"Habit deleted: {habit_id}")
        else:
            logger.info(f"Habit {habit_id} already absent, nothing to delete")
        self._cancel_reminders(habit_id)

    def get(self, habit_id: str) -> Habit:
        """
        Raises:
            HabitNotFoundError: If the habit does not exist
        """
        habit = self.repository.get_habit_by_id(habit_id)
        if habit is None:
            raise HabitNotFoundError(f"Habit {habit_id} not found")
        return habit

    def list(self) -> List[Habit]:
        """All habits, most recently created first; empty if storage is unreachable"""
        try:
            return self.repository.get_all_habits()
        except StorageUnavailableError as e:
            logger.warning(f"Habit list unavailable, showing none: {e}")
            return []
