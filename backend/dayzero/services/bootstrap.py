"""
App hydration - brings local state up to date at startup
"""
import logging
from typing import Any, Dict, Optional

from dayzero.core.constants import KEY_STATE_VERSION, STATE_VERSION
from dayzero.core.exceptions import StorageUnavailableError
from dayzero.services.entitlements import EntitlementService
from dayzero.services.habits import HabitService
from dayzero.services.logs import LogService
from dayzero.services.profile import ProfileService

logger = logging.getLogger(__name__)


def hydrate_app(
    profiles: ProfileService,
    entitlements: EntitlementService,
    habits: HabitService,
    logs: LogService,
    reminders=None,
    tz: Optional[str] = None,
    user_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Startup sequence

    1. Refresh the plan from the remote source (cached plan kept on failure)
    2. Create the profile on first run
    3. Migrate legacy per-day log maps once per state version
    4. Apply the daily AI quota reset
    5. Re-register habit reminders and daily prompts

    Returns:
        Dict with the plan, profile timezone and migration count
    """
    plan = entitlements.refresh_plan(user_id)
    profile = profiles.ensure_profile(tz)

    migrated = 0
    if logs.repository.store.get(KEY_STATE_VERSION) != STATE_VERSION:
        migrated = logs.migrate_legacy_logs()
        logs.repository.store.set(KEY_STATE_VERSION, STATE_VERSION)

    try:
        entitlements.apply_daily_reset(profile.timezone)
    except StorageUnavailableError as e:
        logger.warning(f"Skipping AI quota reset, store unavailable: {e}")

    if reminders is not None:
        for habit in habits.list():
            try:
                reminders.schedule_habit_reminders(habit, profile.timezone)
            except Exception as e:
                logger.error(f"Failed to schedule reminders for habit {habit.id}: {e}")
        reminders.schedule_daily_prompts(profiles.get_notification_preferences(), profile.timezone)

    logger.info(f"App hydrated: plan={plan}, timezone={profile.timezone}, migrated_logs={migrated}")
    return {"plan": plan, "timezone": profile.timezone, "migrated_logs": migrated}
