"""
Notifications Service - Message formatting and delivery
Centralizes all notification message templates and sending logic
"""
import logging

logger = logging.getLogger(__name__)


# ============================================================================
# MESSAGE FORMATTING
# ============================================================================

def format_habit_reminder(habit_title: str, target_per_week: int) -> str:
    """
    Format a reminder message for a scheduled habit time

    Args:
        habit_title: The habit title
        target_per_week: Weekly completion goal

    Returns:
        Formatted reminder message
    """
    return (
        f"Time for {habit_title}!\n\n"
        f"Don't forget to complete your habit. Target: {target_per_week}x per week"
    )


def format_check_in_prompt() -> str:
    return "Good morning! What's the one habit you'll show up for today?"


def format_reflect_prompt() -> str:
    return "How did today go? Take a minute to log your habits and reflect."


# ============================================================================
# NOTIFICATION SENDING
# ============================================================================

class NotificationService:
    """
    Service for sending notifications via a pluggable channel
    """

    def __init__(self, send_callback=None):
        """
        Initialize notification service

        Args:
            send_callback: Optional callback function for sending messages
                          Should have signature: callback(message: str) -> bool
        """
        self.send_callback = send_callback

    def send_notification(self, message: str) -> bool:
        """
        Send a notification message

        Args:
            message: The message to send

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.send_callback:
            logger.warning("No send callback configured - notification not sent")
            logger.info(f"Would have sent: {message}")
            return False

        try:
            result = self.send_callback(message)
            if result:
                logger.info("Notification sent successfully")
            else:
                logger.warning("Notification send callback returned False")
            return result
        except Exception as e:
            logger.error(f"Failed to send notification: {e}")
            return False

    def send_habit_reminder(self, habit_title: str, target_per_week: int) -> bool:
        return self.send_notification(format_habit_reminder(habit_title, target_per_week))
