"""User preferences persisted alongside the diary."""

from datetime import time
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_REMINDER_HOUR = 8
DEFAULT_REMINDER_MINUTE = 0


class Preferences(BaseModel):
    """Settings the patient changes from the settings screen."""

    # Daily check-in reminder
    reminder_enabled: bool = False
    reminder_hour: int = Field(default=DEFAULT_REMINDER_HOUR, ge=0, le=23)
    reminder_minute: int = Field(default=DEFAULT_REMINDER_MINUTE, ge=0, le=59)

    # Shown on PDF exports when set
    patient_identifier: str = ""

    # Permission grants
    notifications_authorized: Optional[bool] = None  # None = never asked
    health_data_authorized: bool = False

    @property
    def reminder_time(self) -> time:
        return time(self.reminder_hour, self.reminder_minute)

    @property
    def formatted_reminder_time(self) -> str:
        return self.reminder_time.strftime("%I:%M %p").lstrip("0")

    @property
    def patient_identifier_for_export(self) -> Optional[str]:
        """Trimmed identifier, or None when blank."""
        trimmed = self.patient_identifier.strip()
        return trimmed or None
