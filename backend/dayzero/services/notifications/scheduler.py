"""
Reminder Scheduler - daily habit reminders on an APScheduler instance
One cron job per habit reminder time, in the user's timezone.
"""
import logging
from typing import List, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from dayzero.core.constants import DEFAULT_REMINDER_TIME
from dayzero.models.habit import Habit, is_valid_time
from dayzero.models.profile import NotificationPreferences
from dayzero.utils.timezone import get_tz
from .service import NotificationService, format_check_in_prompt, format_reflect_prompt

logger = logging.getLogger(__name__)

CHECK_IN_JOB_ID = "daily:check_in"
REFLECT_JOB_ID = "daily:reflect"


def habit_job_prefix(habit_id: str) -> str:
    return f"habit:{habit_id}:"


class ReminderScheduler:
    """
    Schedules and cancels habit reminders

    Works before start(): APScheduler keeps added jobs pending until the
    scheduler runs, so habits can be scheduled during startup.
    """

    def __init__(self, notifications: NotificationService, scheduler: Optional[BackgroundScheduler] = None):
        self.notifications = notifications
        self.scheduler = scheduler or BackgroundScheduler()

    def start(self) -> None:
        if self.scheduler.running:
            logger.warning("Reminder scheduler already running")
            return
        self.scheduler.start()
        logger.info("Reminder scheduler started")

    def stop(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Reminder scheduler stopped")

    def _send_habit_reminder(self, habit_id: str, title: str, target_per_week: int) -> None:
        logger.info(f"[SCHEDULER] Sending reminder for habit: {title} ({habit_id})")
        self.notifications.send_habit_reminder(title, target_per_week)

    def habit_job_ids(self, habit_id: str) -> List[str]:
        prefix = habit_job_prefix(habit_id)
        return [job.id for job in self.scheduler.get_jobs() if job.id.startswith(prefix)]

    def schedule_habit_reminders(self, habit: Habit, tz: str) -> List[str]:
        """
        Replace a habit's reminders with one daily job per target time

        Falls back to a single 09:00 reminder when the habit has no times.

        Returns:
            Ids of the scheduled jobs
        """
        self.cancel_habit_reminders(habit.id)
        zone = get_tz(tz)
        times = [t for t in habit.target_times if is_valid_time(t)] or [DEFAULT_REMINDER_TIME]

        job_ids = []
        for time_str in times:
            hour, minute = (int(part) for part in time_str.split(":"))
            job_id = f"{habit_job_prefix(habit.id)}{time_str}"
            self.scheduler.add_job(
                func=self._send_habit_reminder,
                trigger=CronTrigger(hour=hour, minute=minute, timezone=zone),
                args=[habit.id, habit.title, habit.target_per_week],
                id=job_id,
                name=f"Reminder: {habit.title} at {time_str}",
                replace_existing=True
            )
            job_ids.append(job_id)

        logger.info(f"Scheduled {len(job_ids)} reminder(s) for habit: {habit.title}")
        return job_ids

    def cancel_habit_reminders(self, habit_id: str) -> int:
        """
        Remove every scheduled reminder of a habit

        Returns:
            Number of jobs removed
        """
        removed = 0
        for job_id in self.habit_job_ids(habit_id):
            try:
                self.scheduler.remove_job(job_id)
                removed += 1
            except JobLookupError:
                pass
        if removed:
            logger.info(f"Canceled {removed} reminder(s) for habit ID: {habit_id}")
        return removed

    def schedule_daily_prompts(self, prefs: NotificationPreferences, tz: str) -> List[str]:
        """
        Schedule the morning check-in and evening reflection prompts

        Disabled prompts are removed.
        """
        zone = get_tz(tz)
        scheduled = []
        entries = [
            (CHECK_IN_JOB_ID, prefs.check_in_enabled, prefs.check_in_time_local, format_check_in_prompt()),
            (REFLECT_JOB_ID, prefs.reflect_enabled, prefs.reflect_time_local, format_reflect_prompt()),
        ]
        for job_id, enabled, time_str, message in entries:
            try:
                self.scheduler.remove_job(job_id)
            except JobLookupError:
                pass
            if not enabled:
                continue
            hour, minute = (int(part) for part in time_str.split(":"))
            self.scheduler.add_job(
                func=self.notifications.send_notification,
                trigger=CronTrigger(hour=hour, minute=minute, timezone=zone),
                args=[message],
                id=job_id,
                name=f"Daily prompt at {time_str}",
                replace_existing=True
            )
            scheduled.append(job_id)
        return scheduled
