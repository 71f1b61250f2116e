"""
Logs Repository - storage access for habit logs
The canonical shape is one flat, append-only JSON array of logs. Older
installs stored one status map per day; migrate_legacy_day_logs folds
those into the flat list.
"""
from typing import Any, Dict, List
import logging

from pydantic import ValidationError as PydanticValidationError

from dayzero.core.constants import KEY_HABIT_LOGS, LEGACY_DAY_LOG_PREFIX
from dayzero.core.exceptions import StorageUnavailableError
from dayzero.models.log import HabitLog, Mood
from dayzero.storage import KeyValueStore
from dayzero.utils.timezone import is_valid_day_id

logger = logging.getLogger(__name__)

# Legacy status -> mood of the migrated log; "none" entries are dropped
LEGACY_STATUS_MOODS = {"yes": Mood.OK, "no": Mood.SKIP}


def legacy_log_id(day_id: str, habit_id: str) -> str:
    return f"legacy:{day_id}:{habit_id}"


class LogRepository:
    """Reads and appends habit logs in the key-value store"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load_raw(self) -> List[Dict[str, Any]]:
        raw = self.store.get(KEY_HABIT_LOGS, [])
        return raw if isinstance(raw, list) else []

    def get_all_logs(self) -> List[HabitLog]:
        """
        Get every stored log, newest first

        Raises:
            StorageUnavailableError: If the store cannot be read
        """
        logs = []
        for item in self._load_raw():
            try:
                logs.append(HabitLog(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning(f"Skipping malformed log record {item!r}: {e}")
        return logs

    def append_logs(self, new_logs: List[HabitLog]) -> None:
        """
        Prepend logs to the stored list

        Raises:
            StorageUnavailableError: If the write fails
        """
        if not new_logs:
            return
        raw = [log.model_dump(mode="json") for log in new_logs] + self._load_raw()
        try:
            self.store.set(KEY_HABIT_LOGS, raw)
        except StorageUnavailableError as e:
            logger.error(f"Storage error saving logs: {e}")
            raise

    def legacy_day_keys(self) -> List[str]:
        return self.store.keys(LEGACY_DAY_LOG_PREFIX)

    def migrate_legacy_day_logs(self) -> int:
        """
        Convert per-day status maps into flat logs

        "yes" becomes a log with mood ok, "no" a log with mood skip. Migrated
        logs get the id legacy:<day>:<habit> and ids already stored are
        skipped, so a run interrupted before the day maps are emptied never
        duplicates logs when repeated.

        Returns:
            Number of logs created
        """
        existing_ids = {item.get("id") for item in self._load_raw() if isinstance(item, dict)}
        migrated: List[HabitLog] = []
        emptied: List[str] = []
        for key in self.legacy_day_keys():
            day_id = key[len(LEGACY_DAY_LOG_PREFIX):]
            statuses = self.store.get(key, {})
            if not isinstance(statuses, dict) or not statuses:
                continue
            if not is_valid_day_id(day_id):
                logger.warning(f"Skipping legacy log key with bad day id: {key}")
                continue
            for habit_id, status in statuses.items():
                mood = LEGACY_STATUS_MOODS.get(status)
                if mood is None:
                    continue
                log_id = legacy_log_id(day_id, habit_id)
                if log_id in existing_ids:
                    continue
                existing_ids.add(log_id)
                migrated.append(HabitLog(id=log_id, habit_id=habit_id, date=day_id, mood=mood))
            emptied.append(key)

        self.append_logs(migrated)
        for key in emptied:
            self.store.set(key, {})
        if emptied:
            logger.info(f"Migrated {len(migrated)} legacy log(s) from {len(emptied)} day map(s)")
        return len(migrated)
