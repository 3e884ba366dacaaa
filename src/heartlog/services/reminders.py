"""Daily check-in reminder scheduling.

Only the schedule and permission state are managed here; delivering the
notification is left to whatever runs ``heartlog remind``.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..exceptions import PermissionDeniedError
from ..models.preferences import Preferences
from .preferences import PreferencesService
from .storage import HeartStorage

logger = logging.getLogger(__name__)

REMINDER_TITLE = "HeartLog"
REMINDER_BODY = (
    "Ready for your daily check-in? Just a quick moment to log how you're feeling today."
)


class ReminderService:
    """Manages the one daily check-in reminder."""

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.preferences = PreferencesService(storage)

    def request_permission(self, granted: bool = True) -> bool:
        """Record the patient's answer to the notification permission prompt."""
        self.preferences.update(notifications_authorized=granted)
        logger.info("Notification permission %s", "granted" if granted else "denied")
        return granted

    @property
    def permission_status(self) -> Optional[bool]:
        """True/False once asked, None if never asked."""
        return self.preferences.get().notifications_authorized

    def update_schedule(
        self,
        enabled: bool,
        hour: Optional[int] = None,
        minute: Optional[int] = None,
    ) -> Preferences:
        """
        Turn the reminder on or off and optionally move it.

        Raises:
            PermissionDeniedError: If enabling without notification permission.
        """
        current = self.preferences.get()
        if enabled and not current.notifications_authorized:
            raise PermissionDeniedError(
                "Notifications are turned off. Allow notifications to get daily reminders."
            )

        changes = {"reminder_enabled": enabled}
        if hour is not None:
            changes["reminder_hour"] = hour
        if minute is not None:
            changes["reminder_minute"] = minute
        return self.preferences.update(**changes)

    def next_reminder(self, now: Optional[datetime] = None) -> Optional[datetime]:
        """Next time the reminder fires, or None when disabled."""
        preferences = self.preferences.get()
        if not preferences.reminder_enabled:
            return None

        now = now or datetime.now()
        candidate = now.replace(
            hour=preferences.reminder_hour,
            minute=preferences.reminder_minute,
            second=0,
            microsecond=0,
        )
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    def is_due(self, now: Optional[datetime] = None, window_minutes: int = 1) -> bool:
        """Whether the reminder time falls within the last few minutes."""
        now = now or datetime.now()
        next_time = self.next_reminder(now - timedelta(minutes=window_minutes))
        return next_time is not None and next_time <= now
