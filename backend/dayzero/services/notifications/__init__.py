"""
Notifications module - reminder scheduling and delivery
"""
from .scheduler import ReminderScheduler
from .service import NotificationService, format_habit_reminder

__all__ = ["ReminderScheduler", "NotificationService", "format_habit_reminder"]
