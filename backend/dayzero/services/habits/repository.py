"""
Habits Repository - storage access for the habit list
Habits are kept as one JSON array under a single key, newest first.
"""
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError as PydanticValidationError

from dayzero.core.constants import KEY_HABITS
from dayzero.core.exceptions import StorageUnavailableError
from dayzero.models.habit import Habit
from dayzero.storage import KeyValueStore

logger = logging.getLogger(__name__)


class HabitRepository:
    """Reads and writes the habit list in the key-value store"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load_raw(self) -> List[Dict[str, Any]]:
        raw = self.store.get(KEY_HABITS, [])
        return raw if isinstance(raw, list) else []

    def get_all_habits(self) -> List[Habit]:
        """
        Get all habits, newest first

        Raises:
            StorageUnavailableError: If the store cannot be read
        """
        habits = []
        for item in self._load_raw():
            try:
                habits.append(Habit(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning(f"Skipping malformed habit record {item!r}: {e}")
        return habits

    def get_habit_by_id(self, habit_id: str) -> Optional[Habit]:
        """
        Get a single habit by ID

        Returns:
            Habit or None if not found
        """
        for habit in self.get_all_habits():
            if habit.id == habit_id:
                return habit
        return None

    def save_all_habits(self, habits: List[Habit]) -> None:
        """
        Replace the stored habit list

        Raises:
            StorageUnavailableError: If the write fails
        """
        try:
            self.store.set(KEY_HABITS, [h.model_dump() for h in habits])
        except StorageUnavailableError as e:
            logger.error(f"Storage error saving habits: {e}")
            raise

    def insert_habit(self, habit: Habit) -> Habit:
        """Store a new habit at the front of the list"""
        habits = self.get_all_habits()
        self.save_all_habits([habit] + habits)
        return habit

    def replace_habit(self, habit: Habit) -> Habit:
        """Overwrite the stored habit with the same id, keeping its position"""
        habits = [habit if h.id == habit.id else h for h in self.get_all_habits()]
        self.save_all_habits(habits)
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """
        Delete a habit

        Returns:
            True if a habit was removed, False if it was already absent
        """
        habits = self.get_all_habits()
        remaining = [h for h in habits if h.id != habit_id]
        if len(remaining) == len(habits):
            return False
        self.save_all_habits(remaining)
        return True

    def count_habits(self) -> int:
        return len(self._load_raw())
