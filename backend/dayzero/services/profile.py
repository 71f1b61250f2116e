"""
Profile Service - local user profile and notification preferences
"""
import logging
import threading
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from dayzero.core.config import settings
from dayzero.core.constants import KEY_NOTIFICATIONS, KEY_PROFILE
from dayzero.core.exceptions import StorageUnavailableError, ValidationError
from dayzero.models.profile import NotificationPreferences, Profile, ProfileUpdateRequest
from dayzero.storage import KeyValueStore

logger = logging.getLogger(__name__)


def default_profile(tz: Optional[str] = None) -> Profile:
    """
    Profile used before the user has one stored

    Raises:
        ValidationError: If tz is not a known IANA timezone
    """
    try:
        return Profile(
            timezone=tz or settings.DEFAULT_TIMEZONE,
            daily_reset_hour_local=settings.DAILY_RESET_HOUR
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid profile: {e}")


class ProfileService:
    """Reads and writes the single local profile"""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.RLock()

    def get_stored_profile(self) -> Optional[Profile]:
        """
        Stored profile, or None when none was ever saved

        Raises:
            StorageUnavailableError: If the store cannot be read
        """
        raw = self.store.get(KEY_PROFILE)
        if not raw:
            return None
        try:
            return Profile(**raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed stored profile: {e}")
            return None

    def get_profile(self) -> Profile:
        """
        Current profile; falls back to the default timezone and reset hour
        when none is stored or the store is unreachable
        """
        try:
            profile = self.get_stored_profile()
        except StorageUnavailableError as e:
            logger.warning(f"Profile unavailable, using defaults: {e}")
            profile = None
        return profile or default_profile()

    def ensure_profile(self, tz: Optional[str] = None) -> Profile:
        """
        Create the profile on first use, keeping any existing one untouched

        Args:
            tz: Device timezone to record if no profile exists yet
        """
        with self._lock:
            existing = self.get_stored_profile()
            if existing:
                return existing
            profile = default_profile(tz)
            self.store.set(KEY_PROFILE, profile.model_dump())
            logger.info(f"Created profile with timezone {profile.timezone}")
            return profile

    def update_profile(self, patch: Union[ProfileUpdateRequest, Dict[str, Any]]) -> Profile:
        """
        Apply a partial profile update

        Raises:
            ValidationError: If the resulting profile is invalid
            StorageUnavailableError: If the write fails
        """
        if isinstance(patch, ProfileUpdateRequest):
            patch = patch.model_dump(exclude_none=True)
        with self._lock:
            current = self.get_stored_profile() or default_profile()
            merged = {**current.model_dump(), **{k: v for k, v in patch.items() if v is not None}}
            try:
                profile = Profile(**merged)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid profile: {e}")
            self.store.set(KEY_PROFILE, profile.model_dump())
            logger.info(f"Profile updated: {sorted(patch)}")
            return profile

    def get_notification_preferences(self) -> NotificationPreferences:
        try:
            raw = self.store.get(KEY_NOTIFICATIONS)
        except StorageUnavailableError as e:
            logger.warning(f"Notification preferences unavailable, using defaults: {e}")
            raw = None
        if not raw:
            return NotificationPreferences()
        try:
            return NotificationPreferences(**raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed notification preferences: {e}")
            return NotificationPreferences()

    def set_notification_preferences(self, prefs: NotificationPreferences) -> NotificationPreferences:
        self.store.set(KEY_NOTIFICATIONS, prefs.model_dump())
        return prefs
